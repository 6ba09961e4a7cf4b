"""Photo operations of the Flickr REST API.

Each method wraps exactly one remote method. Reads go out as GET, anything
that changes state goes out as POST. Wherever the API expects an id, the
matching entity can be passed instead of the id string.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any

from flickr_photos.core.config import Settings, get_settings
from flickr_photos.core.errors import ParseError
from flickr_photos.engine.arguments import CommandArguments, join_tags
from flickr_photos.engine.envelope import Envelope
from flickr_photos.engine.models import (
    Comment,
    ExifInfos,
    License,
    Paginated,
    Permission,
    Photo,
    PhotoInfos,
    PhotoPermissions,
    PhotoSize,
    PhotoTag,
)
from flickr_photos.engine.normalizer import (
    decode_comment,
    decode_exif_infos,
    decode_license,
    decode_photo,
    decode_photo_infos,
    decode_photo_permissions,
    decode_photo_size,
)
from flickr_photos.engine.transport import HttpxExecutor, RequestExecutor

logger = logging.getLogger(__name__)

# Sent with every recentlyUpdated call. Kept as-is from the existing client;
# a near-zero Unix timestamp, presumably meaning "since forever".
RECENTLY_UPDATED_MIN_DATE = "10000"

PhotoRef = Photo | PhotoInfos | str
CommentRef = Comment | str
TagRef = PhotoTag | str


class PhotosService:
    def __init__(
        self,
        executor: RequestExecutor | None = None,
        settings: Settings | None = None,
        parse: Callable[[str], Any] = json.loads,
    ) -> None:
        self._settings = settings or get_settings()
        self._owned_executor: HttpxExecutor | None = None
        if executor is None:
            executor = self._owned_executor = HttpxExecutor(self._settings)
        self._executor = executor
        self._parse = parse

    def close(self) -> None:
        if self._owned_executor is not None:
            self._owned_executor.close()

    def __enter__(self) -> PhotosService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def get_contacts_photos(
        self,
        count: int | None = None,
        just_friends: bool | None = None,
        single_photo: bool | None = None,
        include_self: bool | None = None,
    ) -> Paginated[Photo]:
        """Recent photos from the calling user's contacts."""
        args = CommandArguments("flickr.photos.getContactsPhotos")
        _add_contacts_filters(args, count, just_friends, single_photo, include_self)
        return self._get(args).page("photos", "photo", decode_photo)

    def get_contacts_public_photos(
        self,
        user: str,
        count: int | None = None,
        just_friends: bool | None = None,
        single_photo: bool | None = None,
        include_self: bool | None = None,
    ) -> Paginated[Photo]:
        """Recent public photos from the contacts of ``user`` (an NSID)."""
        args = CommandArguments("flickr.photos.getContactsPublicPhotos")
        args.add_param("user_id", user)
        _add_contacts_filters(args, count, just_friends, single_photo, include_self)
        return self._get(args).page("photos", "photo", decode_photo)

    def get_infos(self, photo: PhotoRef) -> PhotoInfos:
        args = CommandArguments("flickr.photos.getInfo")
        args.add_param("photo_id", _photo_id(photo))
        return self._get(args).entity("photo", decode_photo_infos)

    def get_permissions(self, photo: PhotoRef) -> PhotoPermissions:
        args = CommandArguments("flickr.photos.getPerms")
        args.add_param("photo_id", _photo_id(photo))
        return self._get(args).entity("perms", decode_photo_permissions)

    def get_recent(self, per_page: int, page: int) -> Paginated[Photo]:
        """Latest public photos uploaded to Flickr. ``per_page`` is capped at 500 remotely."""
        args = CommandArguments("flickr.photos.getRecent")
        args.add_param("per_page", per_page)
        args.add_param("page", page)
        return self._get(args).page("photos", "photo", decode_photo)

    def get_sizes(self, photo: PhotoRef) -> list[PhotoSize]:
        args = CommandArguments("flickr.photos.getSizes")
        args.add_param("photo_id", _photo_id(photo))
        return self._get(args).items("sizes", "size", decode_photo_size)

    def get_recently_updated(self, per_page: int, page: int) -> Paginated[Photo]:
        """The caller's photos that were recently created or modified.

        Modified covers metadata changes (title, description, tags) and new
        comments.
        """
        args = CommandArguments("flickr.photos.recentlyUpdated")
        args.add_param("per_page", per_page)
        args.add_param("page", page)
        args.add_param("extras", "date_upload")
        args.add_param("min_date", RECENTLY_UPDATED_MIN_DATE)
        return self._get(args).page("photos", "photo", decode_photo)

    def get_exif(self, photo: PhotoRef) -> ExifInfos:
        args = CommandArguments("flickr.photos.getExif")
        args.add_param("photo_id", _photo_id(photo))
        return self._get(args).entity("photo", decode_exif_infos)

    def get_licenses(self) -> list[License]:
        args = CommandArguments("flickr.photos.licenses.getInfo")
        return self._get(args).items("licenses", "license", decode_license)

    def get_comments(self, photo: PhotoRef) -> list[Comment]:
        photo_id = _photo_id(photo)
        args = CommandArguments("flickr.photos.comments.getList")
        args.add_param("photo_id", photo_id)
        return self._get(args).items(
            "comments",
            "comment",
            lambda raw: decode_comment(raw, photo_id=photo_id),
        )

    def delete_photo(self, photo: PhotoRef) -> None:
        args = CommandArguments("flickr.photos.delete")
        args.add_param("photo_id", _photo_id(photo))
        self._post(args)

    def set_tags(self, photo: PhotoRef, *tags: str) -> None:
        """Replace the tags of a photo. Multi-word tags are quoted."""
        args = CommandArguments("flickr.photos.setTag")
        args.add_param("photo_id", _photo_id(photo))
        args.add_param("tags", join_tags(tags))
        self._post(args)

    def remove_tag(self, tag: TagRef) -> None:
        args = CommandArguments("flickr.photos.removeTag")
        args.add_param("tag_id", tag.id if isinstance(tag, PhotoTag) else tag)
        self._post(args)

    def set_photo_meta(self, photo: PhotoRef, title: str, description: str) -> None:
        args = CommandArguments("flickr.photos.setMeta")
        args.add_param("photo_id", _photo_id(photo))
        args.add_param("title", title)
        args.add_param("description", description)
        self._post(args)

    def set_photo_permissions(
        self,
        photo: PhotoRef,
        is_public: bool,
        is_friend: bool,
        is_family: bool,
        perm_comment: Permission,
        perm_addmeta: Permission,
    ) -> None:
        args = CommandArguments("flickr.photos.setPerms")
        args.add_param("photo_id", _photo_id(photo))
        args.add_param("is_public", is_public)
        args.add_param("is_friend", is_friend)
        args.add_param("is_family", is_family)
        args.add_param("perm_comment", Permission(perm_comment))
        args.add_param("perm_addmeta", Permission(perm_addmeta))
        self._post(args)

    def add_photo_comment(self, photo: PhotoRef, text: str) -> Comment:
        """Add a comment and return it. Only the id comes back from Flickr."""
        photo_id = _photo_id(photo)
        args = CommandArguments("flickr.photos.comments.addComment")
        args.add_param("photo_id", photo_id)
        args.add_param("comment_text", text)
        created = self._post(args).entity("comment", decode_comment)
        return Comment(
            id=created.id,
            photo_id=photo_id,
            author_id=created.author_id,
            author_name=created.author_name,
            date_created=created.date_created,
            permalink=created.permalink,
            text=created.text if created.text is not None else text,
        )

    def delete_comment(self, comment: CommentRef) -> None:
        args = CommandArguments("flickr.photos.comments.deleteComment")
        args.add_param("comment_id", _comment_id(comment))
        self._post(args)

    def edit_comment(self, comment: CommentRef, text: str) -> None:
        args = CommandArguments("flickr.photos.comments.editComment")
        args.add_param("comment_id", _comment_id(comment))
        args.add_param("comment_text", text)
        self._post(args)

    def _get(self, args: CommandArguments) -> Envelope:
        logger.debug("GET %s", args.method)
        return self._envelope(self._executor.get(self._settings.rest_url, args.as_params()))

    def _post(self, args: CommandArguments) -> Envelope:
        logger.debug("POST %s", args.method)
        return self._envelope(self._executor.post(self._settings.rest_url, args.as_params()))

    def _envelope(self, body: str) -> Envelope:
        try:
            document = self._parse(body)
        except ValueError as exc:
            raise ParseError(f"Response is not valid JSON: {exc}") from exc
        return Envelope(document)


def _add_contacts_filters(
    args: CommandArguments,
    count: int | None,
    just_friends: bool | None,
    single_photo: bool | None,
    include_self: bool | None,
) -> None:
    args.add_param("count", count)
    args.add_param("just_friends", just_friends)
    args.add_param("single_photo", single_photo)
    args.add_param("include_self", include_self)


def _photo_id(photo: PhotoRef) -> str:
    if isinstance(photo, (Photo, PhotoInfos)):
        return photo.id
    return photo


def _comment_id(comment: CommentRef) -> str:
    if isinstance(comment, Comment):
        return comment.id
    return comment
