"""
MongoDB Database - Infrastructure Layer

This module provides a MongoDB database client for interacting with MongoDB.
It handles connection, collections, and the reads and upserts the breeding
record adapters need. Blocking driver calls run in a worker thread so the
event loop stays free while a query is in flight.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pymongo.errors
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from src.shared import get_logger

logger = get_logger(__name__)

IndexKeys = Union[str, List[Tuple[str, int]]]

# collection -> [(keys, index name, options)]
INDEXES: Dict[str, Sequence[Tuple[IndexKeys, str, Dict[str, Any]]]] = {
    "dogs": (("id", "dog_id_idx", {"unique": True}),),
    "heat_cycles": (
        ("id", "heat_cycle_id_idx", {"unique": True}),
        ([("dog_id", 1), ("start_date", -1)], "dog_start_date_idx", {}),
    ),
    "planned_litters": (
        ("id", "planned_litter_id_idx", {"unique": True}),
        ("female_id", "planned_litter_female_idx", {}),
    ),
    "mating_confirmations": (
        ("id", "mating_confirmation_id_idx", {"unique": True}),
        ("female_id", "mating_confirmation_female_idx", {}),
    ),
    "litters": (("id", "litter_id_idx", {"unique": True}),),
    "reminders": (
        ("id", "reminder_id_idx", {"unique": True}),
        ([("completed", 1), ("due_date", 1)], "reminder_open_due_idx", {}),
    ),
    "calendar_events": (("date", "calendar_event_date_idx", {}),),
}


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a collection from the database.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB collection
        """
        return self.db[collection_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents

        Returns:
            The document if found, None otherwise
        """
        return await asyncio.to_thread(self.db[collection_name].find_one, query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: Sort direction (1 for ascending, -1 for descending)
            skip: Number of documents to skip
            limit: Maximum number of documents to return, all when None

        Returns:
            List of documents
        """

        def _find() -> List[Dict[str, Any]]:
            cursor = self.db[collection_name].find(query)

            if sort_by:
                cursor = cursor.sort(sort_by, sort_direction)

            cursor = cursor.skip(skip)
            if limit is not None:
                cursor = cursor.limit(limit)

            return list(cursor)

        return await asyncio.to_thread(_find)

    async def upsert_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Replace the document matching ``query``, inserting it when missing.

        Args:
            collection_name: Name of the collection
            query: Query to match document to replace
            document: New document

        Returns:
            The stored document

        Raises:
            Exception: If the write is not acknowledged
        """
        result = await asyncio.to_thread(
            self.db[collection_name].replace_one, query, document, upsert=True
        )
        if not result.acknowledged:
            raise Exception(f"Failed to upsert document in {collection_name}")
        return document

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    def _safe_drop_index(self, collection_name: str, index_name: str) -> None:
        """
        Safely drop an index if it exists.

        Args:
            collection_name: Name of the collection
            index_name: Name of the index to drop
        """
        try:
            self.db[collection_name].drop_index(index_name)
        except pymongo.errors.OperationFailure:
            # Index doesn't exist, nothing to do
            pass

    async def create_indexes(self) -> None:
        """
        Create all necessary indexes for the application.
        This is an async method to be called during application startup.
        """
        for collection_name, indexes in INDEXES.items():
            for _, index_name, _ in indexes:
                self._safe_drop_index(collection_name, index_name)

            try:
                for keys, index_name, options in indexes:
                    self.db[collection_name].create_index(
                        keys, name=index_name, background=True, **options
                    )
            except pymongo.errors.OperationFailure as e:
                logger.warning(
                    "mongo.indexes.create_failed",
                    collection=collection_name,
                    error=str(e),
                )
