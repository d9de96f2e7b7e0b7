"""MongoDB-backed stores (collections ``results`` and ``polls``)."""

from typing import Any

from bson import ObjectId
from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from standings.config import Settings
from standings.models import MalformedRecord, Poll, Rank, StudentResult, Vote
from standings.stores.base import PollStore, ResultStore, StoreError, VersionConflict


def _id_match(value: str) -> Any:
    """Match a string id stored either as an ObjectId or as a plain string."""
    if ObjectId.is_valid(value):
        return {"$in": [ObjectId(value), value]}
    return value


def connect(settings: Settings) -> tuple["MongoResultStore", "MongoPollStore"]:
    """Open a client and return stores over the configured database."""
    client = MongoClient(settings.mongo_uri, tz_aware=True)
    db = client[settings.mongo_database]
    return MongoResultStore(db["results"]), MongoPollStore(db["polls"])


class MongoResultStore(ResultStore):
    """Result store over a collection of result documents.

    Every document read is remembered by its string id, so rank writes go
    back to the exact ``_id`` value that was read, ObjectId or string.
    """

    def __init__(self, collection: Collection):
        self.collection = collection
        self._raw_ids: dict[str, Any] = {}

    def find_all(self) -> list[StudentResult]:
        records, _ = self.load()
        return records

    def load(self) -> tuple[list[StudentResult], list[MalformedRecord]]:
        records: list[StudentResult] = []
        malformed: list[MalformedRecord] = []
        try:
            # Sorting by _id gives the same read order on every run
            for doc in self.collection.find({}).sort("_id", 1):
                self._raw_ids[str(doc.get("_id"))] = doc.get("_id")
                try:
                    records.append(StudentResult.from_dict(doc))
                except (KeyError, TypeError, ValueError) as e:
                    malformed.append(MalformedRecord(
                        record_id=str(doc.get("_id")),
                        roll_no=str(doc.get("rollNo", "")),
                        reason=f"could not decode document: {e!r}",
                    ))
        except PyMongoError as e:
            raise StoreError(f"Failed to read results: {e}") from e
        return records, malformed

    def update_rank(self, record_id: str, rank: Rank) -> None:
        if record_id in self._raw_ids:
            id_filter = self._raw_ids[record_id]
        else:
            id_filter = _id_match(record_id)
        try:
            result = self.collection.update_one(
                {"_id": id_filter},
                {"$set": {"rank": rank.to_dict()}},
            )
        except PyMongoError as e:
            raise StoreError(f"Failed to update rank of {record_id}: {e}") from e
        if result.matched_count == 0:
            raise StoreError(f"No result with id {record_id}")


class MongoPollStore(PollStore):

    def __init__(self, collection: Collection):
        self.collection = collection

    def find_by_id(self, poll_id: str) -> Poll | None:
        try:
            doc = self.collection.find_one({"_id": _id_match(poll_id)})
        except PyMongoError as e:
            raise StoreError(f"Failed to read poll {poll_id}: {e}") from e
        return Poll.from_dict(doc) if doc is not None else None

    def save_votes(self, poll_id: str, votes: list[Vote], expected_version: int) -> Poll:
        vote_docs = [
            {"option": v.option, "userId": v.user_id, "createdAt": v.created_at}
            for v in votes
        ]
        # Documents written before versioning have no version field
        version_filter: Any = expected_version
        if expected_version == 0:
            version_filter = {"$in": [0, None]}
        try:
            doc = self.collection.find_one_and_update(
                {"_id": _id_match(poll_id), "version": version_filter},
                {"$set": {"votes": vote_docs}, "$inc": {"version": 1}},
                return_document=ReturnDocument.AFTER,
            )
            if doc is None:
                exists = self.collection.count_documents({"_id": _id_match(poll_id)}, limit=1) > 0
        except PyMongoError as e:
            raise StoreError(f"Failed to save votes of poll {poll_id}: {e}") from e
        if doc is None:
            if not exists:
                raise StoreError(f"No poll with id {poll_id}")
            raise VersionConflict(poll_id, expected_version)
        return Poll.from_dict(doc)
