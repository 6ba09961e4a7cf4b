from __future__ import annotations

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _unwrap_content(value: Any) -> Any:
    # Flickr wraps most text values as {"_content": "..."}.
    if isinstance(value, dict):
        return value.get("_content")
    return value


def _as_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return value


ContentText = Annotated[str | None, BeforeValidator(_unwrap_content)]
ContentCount = Annotated[int | None, BeforeValidator(_unwrap_content)]


class FlickrPayload(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class PageInfoPayload(FlickrPayload):
    page: int | None = None
    pages: int | None = None
    per_page: int | None = Field(default=None, validation_alias=AliasChoices("perpage", "per_page"))
    total: int | None = None


class PhotoPayload(FlickrPayload):
    id: str
    owner: str | None = None
    secret: str | None = None
    server: str | None = None
    farm: int | None = None
    title: ContentText = None
    is_public: bool = Field(default=False, alias="ispublic")
    is_friend: bool = Field(default=False, alias="isfriend")
    is_family: bool = Field(default=False, alias="isfamily")
    date_upload: str | None = Field(default=None, alias="dateupload")


class PhotoTagPayload(FlickrPayload):
    id: str
    author: str | None = None
    raw: str | None = None
    content: str | None = Field(default=None, alias="_content")
    machine_tag: bool = False


class PhotoLocationPayload(FlickrPayload):
    latitude: float
    longitude: float
    accuracy: int
    context: int
    neighbourhood: ContentText = None
    locality: ContentText = None
    county: ContentText = None
    region: ContentText = None
    country: ContentText = None


class OwnerPayload(FlickrPayload):
    nsid: str | None = None
    username: str | None = None
    realname: str | None = None


class VisibilityPayload(FlickrPayload):
    is_public: bool = Field(default=False, alias="ispublic")
    is_friend: bool = Field(default=False, alias="isfriend")
    is_family: bool = Field(default=False, alias="isfamily")


class DatesPayload(FlickrPayload):
    posted: str | None = None
    taken: str | None = None
    last_update: str | None = Field(default=None, alias="lastupdate")


class EditabilityPayload(FlickrPayload):
    can_comment: bool = Field(default=False, alias="cancomment")
    can_add_meta: bool = Field(default=False, alias="canaddmeta")


class TagListPayload(FlickrPayload):
    tag: Annotated[list[PhotoTagPayload], BeforeValidator(_as_list)] = Field(default_factory=list)


class UrlPayload(FlickrPayload):
    type: str | None = None
    content: str | None = Field(default=None, alias="_content")


class UrlListPayload(FlickrPayload):
    url: Annotated[list[UrlPayload], BeforeValidator(_as_list)] = Field(default_factory=list)


class PhotoInfoPayload(FlickrPayload):
    id: str
    secret: str | None = None
    server: str | None = None
    farm: int | None = None
    original_secret: str | None = Field(default=None, alias="originalsecret")
    original_format: str | None = Field(default=None, alias="originalformat")
    date_uploaded: str | None = Field(default=None, alias="dateuploaded")
    is_favorite: bool = Field(default=False, alias="isfavorite")
    license: str | None = None
    rotation: int | None = None
    views: int | None = None
    media: str | None = None
    title: ContentText = None
    description: ContentText = None
    comments: ContentCount = None
    owner: OwnerPayload | None = None
    visibility: VisibilityPayload = Field(default_factory=VisibilityPayload)
    dates: DatesPayload = Field(default_factory=DatesPayload)
    editability: EditabilityPayload = Field(default_factory=EditabilityPayload)
    tags: TagListPayload = Field(default_factory=TagListPayload)
    urls: UrlListPayload = Field(default_factory=UrlListPayload)
    location: PhotoLocationPayload | None = None


class PhotoPermissionsPayload(FlickrPayload):
    id: str
    is_public: bool = Field(default=False, alias="ispublic")
    is_friend: bool = Field(default=False, alias="isfriend")
    is_family: bool = Field(default=False, alias="isfamily")
    perm_comment: int = Field(alias="permcomment")
    perm_addmeta: int = Field(alias="permaddmeta")


class PhotoSizePayload(FlickrPayload):
    label: str
    width: int | None = None
    height: int | None = None
    source: str
    url: str | None = None
    media: str | None = None


class ExifTagPayload(FlickrPayload):
    tagspace: str | None = None
    tagspace_id: int | None = Field(default=None, alias="tagspaceid")
    tag: str | None = None
    label: str | None = None
    raw: ContentText = None
    clean: ContentText = None


class ExifPayload(FlickrPayload):
    id: str
    camera: ContentText = None
    exif: Annotated[list[ExifTagPayload], BeforeValidator(_as_list)] = Field(default_factory=list)


class LicensePayload(FlickrPayload):
    id: str
    name: str
    url: str | None = None


class CommentPayload(FlickrPayload):
    id: str
    author: str | None = None
    author_name: str | None = Field(default=None, alias="authorname")
    date_create: str | None = Field(default=None, alias="datecreate")
    permalink: str | None = None
    content: str | None = Field(default=None, alias="_content")
