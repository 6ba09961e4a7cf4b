from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from flickr_photos.core.errors import ParseError
from flickr_photos.engine.models import (
    Comment,
    ExifInfos,
    ExifTag,
    License,
    Permission,
    Photo,
    PhotoInfos,
    PhotoLocation,
    PhotoPermissions,
    PhotoSize,
    PhotoTag,
)
from flickr_photos.engine.schemas import (
    CommentPayload,
    ExifPayload,
    LicensePayload,
    PhotoInfoPayload,
    PhotoLocationPayload,
    PhotoPayload,
    PhotoPermissionsPayload,
    PhotoSizePayload,
    PhotoTagPayload,
)

PayloadType = TypeVar("PayloadType", bound=BaseModel)


def decode_photo(data: Any) -> Photo:
    payload = _validate(PhotoPayload, data)
    return Photo(
        id=payload.id,
        owner_id=payload.owner,
        secret=payload.secret,
        server=payload.server,
        farm=payload.farm,
        title=payload.title,
        is_public=payload.is_public,
        is_friend=payload.is_friend,
        is_family=payload.is_family,
        date_upload=_parse_timestamp(payload.date_upload),
    )


def decode_photo_tag(data: Any) -> PhotoTag:
    return _to_tag(_validate(PhotoTagPayload, data))


def decode_photo_location(data: Any) -> PhotoLocation:
    return _to_location(_validate(PhotoLocationPayload, data))


def decode_photo_infos(data: Any) -> PhotoInfos:
    payload = _validate(PhotoInfoPayload, data)
    owner = payload.owner
    return PhotoInfos(
        id=payload.id,
        secret=payload.secret,
        server=payload.server,
        farm=payload.farm,
        original_secret=payload.original_secret,
        original_format=payload.original_format,
        title=payload.title,
        description=payload.description,
        owner_id=owner.nsid if owner else None,
        owner_username=owner.username if owner else None,
        owner_realname=owner.realname if owner else None,
        is_public=payload.visibility.is_public,
        is_friend=payload.visibility.is_friend,
        is_family=payload.visibility.is_family,
        license_id=payload.license,
        is_favorite=payload.is_favorite,
        rotation=payload.rotation,
        views=payload.views,
        media=payload.media,
        comments_count=payload.comments,
        date_uploaded=_parse_timestamp(payload.date_uploaded or payload.dates.posted),
        date_taken=payload.dates.taken,
        last_update=_parse_timestamp(payload.dates.last_update),
        can_comment=payload.editability.can_comment,
        can_add_meta=payload.editability.can_add_meta,
        tags=tuple(_to_tag(tag) for tag in payload.tags.tag),
        urls=tuple(url.content for url in payload.urls.url if url.content),
        location=_to_location(payload.location) if payload.location else None,
    )


def decode_photo_permissions(data: Any) -> PhotoPermissions:
    payload = _validate(PhotoPermissionsPayload, data)
    return PhotoPermissions(
        id=payload.id,
        is_public=payload.is_public,
        is_friend=payload.is_friend,
        is_family=payload.is_family,
        perm_comment=_to_permission(payload.perm_comment),
        perm_addmeta=_to_permission(payload.perm_addmeta),
    )


def decode_photo_size(data: Any) -> PhotoSize:
    payload = _validate(PhotoSizePayload, data)
    return PhotoSize(
        label=payload.label,
        width=payload.width,
        height=payload.height,
        source=payload.source,
        url=payload.url,
        media=payload.media,
    )


def decode_exif_infos(data: Any) -> ExifInfos:
    payload = _validate(ExifPayload, data)
    return ExifInfos(
        photo_id=payload.id,
        camera=payload.camera or None,
        tags=tuple(
            ExifTag(
                tagspace=tag.tagspace,
                tagspace_id=tag.tagspace_id,
                tag=tag.tag,
                label=tag.label,
                raw=tag.raw,
                clean=tag.clean,
            )
            for tag in payload.exif
        ),
    )


def decode_license(data: Any) -> License:
    payload = _validate(LicensePayload, data)
    return License(id=payload.id, name=payload.name, url=payload.url or None)


def decode_comment(data: Any, *, photo_id: str | None = None) -> Comment:
    payload = _validate(CommentPayload, data)
    return Comment(
        id=payload.id,
        photo_id=photo_id,
        author_id=payload.author,
        author_name=payload.author_name,
        date_created=_parse_timestamp(payload.date_create),
        permalink=payload.permalink,
        text=payload.content,
    )


def _validate(model: type[PayloadType], data: Any) -> PayloadType:
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object for {model.__name__}, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"Invalid {model.__name__}: {exc}") from exc


def _to_tag(payload: PhotoTagPayload) -> PhotoTag:
    return PhotoTag(
        id=payload.id,
        author_id=payload.author,
        raw=payload.raw,
        text=payload.content,
        machine_tag=payload.machine_tag,
    )


def _to_location(payload: PhotoLocationPayload) -> PhotoLocation:
    return PhotoLocation(
        latitude=payload.latitude,
        longitude=payload.longitude,
        accuracy=payload.accuracy,
        context=payload.context,
        neighbourhood=payload.neighbourhood or None,
        locality=payload.locality or None,
        county=payload.county or None,
        region=payload.region or None,
        country=payload.country or None,
    )


def _to_permission(value: int) -> Permission:
    try:
        return Permission(value)
    except ValueError as exc:
        raise ParseError(f"Unknown permission value: {value}") from exc


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None
