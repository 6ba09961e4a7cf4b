from __future__ import annotations

from datetime import UTC, datetime

import pytest

from flickr_photos.core.errors import ParseError
from flickr_photos.engine import normalizer
from flickr_photos.engine.models import Permission


def test_decode_photo_location_tolerates_missing_neighbourhood():
    data = _location()
    del data["neighbourhood"]

    location = normalizer.decode_photo_location(data)

    assert location.neighbourhood is None
    assert location.latitude == 48.858205
    assert location.longitude == 2.294359
    assert location.locality == "Paris"
    assert location.country == "France"


def test_decode_photo_location_requires_latitude():
    data = _location()
    del data["latitude"]

    with pytest.raises(ParseError):
        normalizer.decode_photo_location(data)


def test_decode_photo_location_rejects_non_numeric_latitude():
    data = _location()
    data["latitude"] = "north"

    with pytest.raises(ParseError):
        normalizer.decode_photo_location(data)


def test_decode_photo_location_accepts_plain_strings():
    data = _location()
    data["region"] = "Ile-de-France"

    assert normalizer.decode_photo_location(data).region == "Ile-de-France"


def test_decode_photo_builds_upload_date_and_flags():
    photo = normalizer.decode_photo(
        {
            "id": "53912345678",
            "owner": "12037949754@N01",
            "secret": "abc123",
            "server": "65535",
            "farm": 66,
            "title": "Harbour",
            "ispublic": 1,
            "isfriend": 0,
            "isfamily": "0",
            "dateupload": "1704067200",
        }
    )

    assert photo.id == "53912345678"
    assert photo.owner_id == "12037949754@N01"
    assert photo.is_public is True
    assert photo.is_family is False
    assert photo.date_upload == datetime(2024, 1, 1, tzinfo=UTC)
    assert photo.source_url("b") == "https://live.staticflickr.com/65535/53912345678_abc123_b.jpg"


def test_decode_photo_accepts_numeric_id():
    assert normalizer.decode_photo({"id": 12345}).id == "12345"


def test_decode_photo_requires_id():
    with pytest.raises(ParseError):
        normalizer.decode_photo({"title": "no id"})


def test_decode_photo_rejects_non_objects():
    with pytest.raises(ParseError):
        normalizer.decode_photo(["not", "an", "object"])


def test_decode_photo_infos_flattens_nested_objects():
    infos = normalizer.decode_photo_infos(_photo_info())

    assert infos.id == "2733"
    assert infos.title == "Eiffel"
    assert infos.description == "From the Trocadero"
    assert infos.owner_id == "12037949754@N01"
    assert infos.owner_username == "bees"
    assert infos.is_public is True
    assert infos.comments_count == 3
    assert infos.views == 120
    assert infos.date_uploaded == datetime(2024, 1, 1, tzinfo=UTC)
    assert infos.date_taken == "2023-12-31 18:00:00"
    assert infos.can_comment is True
    assert infos.can_add_meta is False
    assert [tag.text for tag in infos.tags] == ["paris", "tower"]
    assert infos.tags[0].id == "2733-tag-1"
    assert infos.urls == ("https://www.flickr.com/photos/bees/2733/",)
    assert infos.location is not None
    assert infos.location.neighbourhood == "Gros Caillou"


def test_decode_photo_infos_without_optional_sections():
    infos = normalizer.decode_photo_infos({"id": "1"})

    assert infos.location is None
    assert infos.tags == ()
    assert infos.urls == ()
    assert infos.owner_id is None
    assert infos.date_uploaded is None


def test_decode_photo_infos_fails_on_broken_location():
    data = _photo_info()
    del data["location"]["latitude"]

    with pytest.raises(ParseError):
        normalizer.decode_photo_infos(data)


def test_decode_photo_permissions_maps_wire_values():
    perms = normalizer.decode_photo_permissions(
        {
            "id": "1",
            "ispublic": 1,
            "isfriend": 0,
            "isfamily": 0,
            "permcomment": 3,
            "permaddmeta": "2",
        }
    )

    assert perms.perm_comment is Permission.EVERYBODY
    assert perms.perm_addmeta is Permission.CONTACTS


def test_decode_photo_permissions_rejects_unknown_value():
    with pytest.raises(ParseError):
        normalizer.decode_photo_permissions({"id": "1", "permcomment": 9, "permaddmeta": 0})


def test_decode_exif_infos_unwraps_content():
    exif = normalizer.decode_exif_infos(
        {
            "id": "1",
            "camera": "Canon EOS 5D",
            "exif": [
                {
                    "tagspace": "IFD0",
                    "tagspaceid": 0,
                    "tag": "Make",
                    "label": "Make",
                    "raw": {"_content": "Canon"},
                },
                {
                    "tagspace": "ExifIFD",
                    "tagspaceid": 0,
                    "tag": "ExposureTime",
                    "label": "Exposure",
                    "raw": {"_content": "1/250"},
                    "clean": {"_content": "0.004 sec (1/250)"},
                },
            ],
        }
    )

    assert exif.camera == "Canon EOS 5D"
    assert exif.tags[0].raw == "Canon"
    assert exif.tags[0].clean is None
    assert exif.tags[1].clean == "0.004 sec (1/250)"


def test_decode_license_empty_url_is_none():
    license_ = normalizer.decode_license({"id": 0, "name": "All Rights Reserved", "url": ""})

    assert license_.id == "0"
    assert license_.url is None


def test_decode_comment_links_photo_by_id():
    comment = normalizer.decode_comment(
        {
            "id": "6065-109722179-72057594077818641",
            "author": "35468159852@N01",
            "authorname": "Rev Dan Catt",
            "datecreate": "1141841470",
            "permalink": "https://www.flickr.com/photos/bees/109722179/#comment72057594077818641",
            "_content": "Umm, I'm not sure, can I get back to you on that one?",
        },
        photo_id="109722179",
    )

    assert comment.photo_id == "109722179"
    assert comment.author_name == "Rev Dan Catt"
    assert comment.date_created == datetime.fromtimestamp(1141841470, tz=UTC)
    assert comment.text.startswith("Umm")


def test_parse_timestamp_handles_invalid_values():
    assert normalizer._parse_timestamp(None) is None
    assert normalizer._parse_timestamp("") is None
    assert normalizer._parse_timestamp("not-a-date") is None


def test_photo_license_id_matches_license_id():
    infos = normalizer.decode_photo_infos({"id": "1", "license": 3})
    licenses = [
        normalizer.decode_license({"id": 0, "name": "All Rights Reserved", "url": ""}),
        normalizer.decode_license({"id": 3, "name": "Attribution-NoDerivs License"}),
    ]

    matching = [license_ for license_ in licenses if license_.id == infos.license_id]

    assert [license_.name for license_ in matching] == ["Attribution-NoDerivs License"]


def test_decode_photo_infos_reads_comment_count_as_int():
    wrapped = normalizer.decode_photo_infos({"id": "1", "comments": {"_content": "7"}})
    bare = normalizer.decode_photo_infos({"id": "1", "comments": 2})

    assert wrapped.comments_count == 7
    assert bare.comments_count == 2


@pytest.mark.parametrize("field", ["comments", "views", "rotation"])
def test_decode_photo_infos_rejects_malformed_counts(field):
    data = {"id": "1", field: {"_content": "many"} if field == "comments" else "many"}

    with pytest.raises(ParseError):
        normalizer.decode_photo_infos(data)


def _location() -> dict:
    return {
        "latitude": "48.858205",
        "longitude": "2.294359",
        "accuracy": "16",
        "context": "0",
        "neighbourhood": {
            "_content": "Gros Caillou",
            "place_id": "xQ4tawtWUL1NrOY",
            "woeid": "55863395",
        },
        "locality": {"_content": "Paris"},
        "county": {"_content": "Paris"},
        "region": {"_content": "Ile-de-France"},
        "country": {"_content": "France"},
    }


def _photo_info() -> dict:
    return {
        "id": "2733",
        "secret": "123456",
        "server": "12",
        "farm": 1,
        "dateuploaded": "1704067200",
        "isfavorite": 0,
        "license": "3",
        "rotation": 0,
        "views": "120",
        "media": "photo",
        "owner": {"nsid": "12037949754@N01", "username": "bees", "realname": "Cal Henderson"},
        "title": {"_content": "Eiffel"},
        "description": {"_content": "From the Trocadero"},
        "visibility": {"ispublic": 1, "isfriend": 0, "isfamily": 0},
        "dates": {
            "posted": "1704067200",
            "taken": "2023-12-31 18:00:00",
            "lastupdate": "1704153600",
        },
        "editability": {"cancomment": 1, "canaddmeta": 0},
        "comments": {"_content": "3"},
        "tags": {
            "tag": [
                _tag("2733-tag-1", "Paris", "paris"),
                _tag("2733-tag-2", "Tower", "tower"),
            ]
        },
        "urls": {
            "url": [{"type": "photopage", "_content": "https://www.flickr.com/photos/bees/2733/"}]
        },
        "location": _location(),
    }


def _tag(tag_id: str, raw: str, content: str) -> dict:
    return {
        "id": tag_id,
        "author": "12037949754@N01",
        "raw": raw,
        "_content": content,
        "machine_tag": 0,
    }
