import datetime
import re
from enum import Enum

from app.models.search_response import BookResult, MovieResult

RATING_MIN = 1
RATING_MAX = 10
_YEAR_PREFIX = re.compile(r"^(\d{4})")


class MediaType(str, Enum):
    MOVIE = "movie"
    TV_SHOW = "tv-show"
    BOOK = "book"


class ActivityStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    DROPPED = "dropped"
    ON_HOLD = "on-hold"


def _now():
    return datetime.datetime.now(datetime.timezone.utc)


class TrackedActivity:
    """
    A record of the local tracking store. A TrackedActivity always has a
    known media type, a non-empty media id and a valid status; rating, when
    present, is an integer from 1 to 10.
    """
    def __init__(self, media_type, media_id, status=ActivityStatus.PLANNING, rating=None,
                 is_favorite=False, poster_path=None, overview=None, year=None,
                 description=None, progress=None, notes=None, id=None,
                 created_at=None, updated_at=None):
        self.id = id
        self.media_type = TrackedActivity.normalize_media_type(media_type)
        self.media_id = TrackedActivity.normalize_media_id(media_id)
        self.status = TrackedActivity.normalize_status(status)
        self.rating = TrackedActivity.normalize_rating(rating)
        self.is_favorite = bool(is_favorite)
        self.poster_path = poster_path
        self.overview = overview
        self.year = TrackedActivity.normalize_year(year)
        self.description = description
        self.progress = progress
        self.notes = notes
        self.created_at = created_at or _now()
        self.updated_at = updated_at or self.created_at

    @staticmethod
    def normalize_media_type(media_type):
        try:
            return MediaType(media_type)
        except ValueError:
            raise ValueError(f"InvalidActivityError - unknown media type {media_type!r}")

    @staticmethod
    def normalize_media_id(media_id):
        if media_id is None:
            raise ValueError("InvalidActivityError - missing media id")

        media_id = str(media_id).strip()
        if not media_id:
            raise ValueError("InvalidActivityError - missing media id")
        return media_id

    @staticmethod
    def normalize_status(status):
        if status is None or status == "":
            return ActivityStatus.PLANNING
        try:
            return ActivityStatus(status)
        except ValueError:
            raise ValueError(f"InvalidActivityError - unknown status {status!r}")

    @staticmethod
    def normalize_rating(rating):
        if rating is None or rating == "":
            return None

        if isinstance(rating, bool) or not isinstance(rating, (int, float, str)):
            raise ValueError("InvalidActivityError - rating is not int, float or string")

        rating = float(rating)
        if not rating.is_integer():
            raise ValueError("InvalidActivityError - rating is not a whole number")

        rating = int(rating)
        if RATING_MIN <= rating <= RATING_MAX:
            return rating
        raise ValueError("InvalidActivityError - rating must be between 1 and 10")

    @staticmethod
    def normalize_year(year):
        if year is None or year == "":
            return None

        if isinstance(year, str):
            year = year.strip()
            if not year.isdigit():
                raise ValueError("InvalidActivityError - found character in year")
            year = int(year)

        if not isinstance(year, int) or isinstance(year, bool) or year <= 0:
            raise ValueError("InvalidActivityError - year is not a positive int")
        return year

    @staticmethod
    def year_from_release_date(release_date):
        match = _YEAR_PREFIX.match(release_date or "")
        return int(match.group(1)) if match else None

    @classmethod
    def from_result(cls, result, status=ActivityStatus.PLANNING):
        """Derive a tracking record from a MovieResult or BookResult."""
        if result.source == "tmdb":
            assert isinstance(result, MovieResult)
            return cls(
                media_type=MediaType.MOVIE,
                media_id=result.id,
                status=status,
                poster_path=result.poster_url,
                overview=result.overview or None,
                year=cls.year_from_release_date(result.release_date),
                description=result.title,
            )
        if result.source == "openlibrary":
            assert isinstance(result, BookResult)
            return cls(
                media_type=MediaType.BOOK,
                media_id=result.key,
                status=status,
                poster_path=result.cover_url,
                year=result.publish_year,
                description=result.title,
            )
        raise ValueError(f"InvalidActivityError - unknown result source {result.source!r}")

    def touch(self):
        self.updated_at = _now()

    def to_dict(self):
        return {
            "id": self.id,
            "mediaType": self.media_type.value,
            "mediaId": self.media_id,
            "status": self.status.value,
            "rating": self.rating,
            "isFavorite": self.is_favorite,
            "posterPath": self.poster_path,
            "overview": self.overview,
            "year": self.year,
            "description": self.description,
            "progress": self.progress,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data):
        created_at = data.get("createdAt")
        updated_at = data.get("updatedAt")
        return cls(id=data.get("id", None),
                   media_type=data.get("mediaType", None),
                   media_id=data.get("mediaId", None),
                   status=data.get("status", None),
                   rating=data.get("rating", None),
                   is_favorite=data.get("isFavorite", False),
                   poster_path=data.get("posterPath", None),
                   overview=data.get("overview", None),
                   year=data.get("year", None),
                   description=data.get("description", None),
                   progress=data.get("progress", None),
                   notes=data.get("notes", None),
                   created_at=datetime.datetime.fromisoformat(created_at) if created_at else None,
                   updated_at=datetime.datetime.fromisoformat(updated_at) if updated_at else None)
