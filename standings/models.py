"""Core data models for student results and polls."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self


@dataclass(frozen=True)
class Course:
    name: str
    code: str
    cgpi: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "code": self.code, "cgpi": self.cgpi}


@dataclass(frozen=True)
class Semester:
    """One semester of a student's result.

    Attributes:
        semester: Semester index or label (e.g. 3 or "III")
        sgpi: Grade index for this term alone
        cgpi: Cumulative grade index up to and including this term
        courses: Courses taken this term, in the order they were published
        sgpi_total: Credit-weighted SGPI total
        cgpi_total: Credit-weighted CGPI total
    """
    semester: int | str
    sgpi: float
    cgpi: float
    courses: list[Course] = field(default_factory=list)
    sgpi_total: float = 0
    cgpi_total: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "semester": self.semester,
            "sgpi": self.sgpi,
            "cgpi": self.cgpi,
            "courses": [c.to_dict() for c in self.courses],
            "sgpi_total": self.sgpi_total,
            "cgpi_total": self.cgpi_total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            semester=data["semester"],
            sgpi=data["sgpi"],
            cgpi=data["cgpi"],
            courses=[
                Course(name=c["name"], code=c["code"], cgpi=c["cgpi"])
                for c in data.get("courses", [])
            ],
            sgpi_total=data.get("sgpi_total", 0),
            cgpi_total=data.get("cgpi_total", 0),
        )


@dataclass
class Rank:
    """Ranks of a student within each partition (1 = best, 0 = unranked).

    ``class_`` is stored under the key ``class``.
    """
    college: int = 0
    batch: int = 0
    branch: int = 0
    class_: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "college": self.college,
            "batch": self.batch,
            "branch": self.branch,
            "class": self.class_,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        data = data or {}
        return cls(
            college=data.get("college", 0),
            batch=data.get("batch", 0),
            branch=data.get("branch", 0),
            class_=data.get("class", 0),
        )


@dataclass
class StudentResult:
    """A student's full academic result.

    Attributes:
        id: Store identity of the record
        roll_no: Unique roll number
        name: Student name
        batch: Admission year
        branch: Branch/department code
        programme: Degree programme
        semesters: Semesters in chronological order (last = most recent)
        rank: Derived ranks, recomputed by the rank aggregation job
        gender: "male", "female" or "not_specified"
    """
    id: str
    roll_no: str
    batch: int
    branch: str
    programme: str
    semesters: list[Semester] = field(default_factory=list)
    rank: Rank = field(default_factory=Rank)
    name: str = ""
    gender: str = "not_specified"

    @property
    def latest_semester(self) -> Semester | None:
        return self.semesters[-1] if self.semesters else None

    @property
    def cgpi(self) -> float | None:
        """CGPI of the most recent semester, or None if there is none."""
        latest = self.latest_semester
        return latest.cgpi if latest is not None else None

    @property
    def previous_cgpi(self) -> float | None:
        """CGPI of the second-to-last semester, or None."""
        if len(self.semesters) < 2:
            return None
        return self.semesters[-2].cgpi

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "rollNo": self.roll_no,
            "name": self.name,
            "batch": self.batch,
            "branch": self.branch,
            "programme": self.programme,
            "gender": self.gender,
            "semesters": [s.to_dict() for s in self.semesters],
            "rank": self.rank.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=str(data["_id"]),
            roll_no=data["rollNo"],
            name=data.get("name", ""),
            batch=int(data["batch"]),
            branch=data["branch"],
            programme=data.get("programme", ""),
            gender=data.get("gender", "not_specified"),
            semesters=[Semester.from_dict(s) for s in data.get("semesters", [])],
            rank=Rank.from_dict(data.get("rank")),
        )


@dataclass(frozen=True)
class Vote:
    option: str
    user_id: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "option": self.option,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        created_at = data["createdAt"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(option=data["option"], user_id=data["userId"], created_at=created_at)


@dataclass
class Poll:
    """A community poll.

    Attributes:
        id: Store identity of the poll
        question: The poll question
        options: Ordered, unique option labels
        multiple_choice: Whether a user may vote for more than one option
        closes_at: Votes are rejected once this moment has passed
        created_by: User id of the poll's creator
        votes: Current votes; order is irrelevant for tallying
        description: Optional longer text
        version: Incremented on every successful vote write
    """
    id: str
    question: str
    options: list[str]
    multiple_choice: bool
    closes_at: datetime
    created_by: str
    votes: list[Vote] = field(default_factory=list)
    description: str = ""
    version: int = 0

    def is_closed(self, now: datetime) -> bool:
        return self.closes_at < now

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "question": self.question,
            "description": self.description,
            "options": list(self.options),
            "multipleChoice": self.multiple_choice,
            "closesAt": self.closes_at.isoformat(),
            "createdBy": self.created_by,
            "votes": [v.to_dict() for v in self.votes],
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        closes_at = data["closesAt"]
        if isinstance(closes_at, str):
            closes_at = datetime.fromisoformat(closes_at)
        return cls(
            id=str(data["_id"]),
            question=data["question"],
            description=data.get("description", ""),
            options=list(data["options"]),
            multiple_choice=bool(data.get("multipleChoice", False)),
            closes_at=closes_at,
            created_by=data.get("createdBy", ""),
            votes=[Vote.from_dict(v) for v in data.get("votes", [])],
            version=data.get("version", 0),
        )


@dataclass(frozen=True)
class MalformedRecord:
    """A stored record that could not be ranked."""
    record_id: str
    roll_no: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.record_id, "rollNo": self.roll_no, "reason": self.reason}


@dataclass(frozen=True)
class OptionTally:
    """Vote count and share of one poll option."""
    option: str
    count: int
    percent: float

    def to_dict(self) -> dict[str, Any]:
        return {"option": self.option, "count": self.count, "percent": self.percent}
