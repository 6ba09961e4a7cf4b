from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Generic, TypeVar

T = TypeVar("T")

STATIC_HOST = "https://live.staticflickr.com"


class Permission(IntEnum):
    JUST_OWNER = 0
    FRIENDS_FAMILY = 1
    CONTACTS = 2
    EVERYBODY = 3


@dataclass(frozen=True)
class Photo:
    id: str
    owner_id: str | None
    secret: str | None
    server: str | None
    farm: int | None
    title: str | None
    is_public: bool
    is_friend: bool
    is_family: bool
    date_upload: datetime | None

    def source_url(self, size: str | None = None) -> str:
        if not self.server or not self.secret:
            raise ValueError(f"Photo {self.id} has no server/secret to build a URL from")
        suffix = f"_{size}" if size else ""
        return f"{STATIC_HOST}/{self.server}/{self.id}_{self.secret}{suffix}.jpg"


@dataclass(frozen=True)
class PhotoTag:
    id: str
    author_id: str | None
    raw: str | None
    text: str | None
    machine_tag: bool


@dataclass(frozen=True)
class PhotoLocation:
    latitude: float
    longitude: float
    accuracy: int
    context: int
    neighbourhood: str | None
    locality: str | None
    county: str | None
    region: str | None
    country: str | None


@dataclass(frozen=True)
class PhotoInfos:
    id: str
    secret: str | None
    server: str | None
    farm: int | None
    original_secret: str | None
    original_format: str | None
    title: str | None
    description: str | None
    owner_id: str | None
    owner_username: str | None
    owner_realname: str | None
    is_public: bool
    is_friend: bool
    is_family: bool
    license_id: str | None
    is_favorite: bool
    rotation: int | None
    views: int | None
    media: str | None
    comments_count: int | None
    date_uploaded: datetime | None
    date_taken: str | None
    last_update: datetime | None
    can_comment: bool
    can_add_meta: bool
    tags: tuple[PhotoTag, ...]
    urls: tuple[str, ...]
    location: PhotoLocation | None


@dataclass(frozen=True)
class PhotoPermissions:
    id: str
    is_public: bool
    is_friend: bool
    is_family: bool
    perm_comment: Permission
    perm_addmeta: Permission


@dataclass(frozen=True)
class PhotoSize:
    label: str
    width: int | None
    height: int | None
    source: str
    url: str | None
    media: str | None


@dataclass(frozen=True)
class ExifTag:
    tagspace: str | None
    tagspace_id: int | None
    tag: str | None
    label: str | None
    raw: str | None
    clean: str | None


@dataclass(frozen=True)
class ExifInfos:
    photo_id: str
    camera: str | None
    tags: tuple[ExifTag, ...]


@dataclass(frozen=True)
class License:
    id: str
    name: str
    url: str | None


@dataclass(frozen=True)
class Comment:
    id: str
    photo_id: str | None
    author_id: str | None
    author_name: str | None
    date_created: datetime | None
    permalink: str | None
    text: str | None


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """One page of a remote listing. Fetch the next page with a new request."""

    items: tuple[T, ...]
    page: int
    pages: int
    per_page: int
    total: int

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]
