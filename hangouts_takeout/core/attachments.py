"""Converters for nested raw records: ids, formatting and attachments."""

from typing import Any, Optional

from hangouts_takeout.core import enums
from hangouts_takeout.core.errors import FieldTypeError, TagPayloadMismatch
from hangouts_takeout.core.models import (
    Address,
    AttachmentSegment,
    EmbedItem,
    Formatting,
    Geo,
    ParticipantId,
    Photo,
    Place,
    RepresentativeImage,
    Thing,
    Thumbnail,
)
from hangouts_takeout.core.raw import (
    RawAddress,
    RawAttachment,
    RawEmbedItem,
    RawFormatting,
    RawGeo,
    RawParticipantId,
    RawPlaceV2,
    RawPlusPhoto,
    RawRepresentativeImage,
    RawThingV2,
    RawThumbnail,
    optional,
    optional_bool,
    optional_list,
    require,
    require_list,
    require_str,
)
from hangouts_takeout.core.scalars import decode_count, decode_float

# embed item keys that each carry one attachment payload
EMBED_PAYLOAD_KEYS = ("plus_photo", "place_v2", "thing_v2")


def convert_participant_id(
    raw: RawParticipantId, path: str = "participant_id"
) -> ParticipantId:
    """maps a raw participant id; both components must be strings and are kept verbatim."""
    return ParticipantId(
        gaia_id=require_str(raw, "gaia_id", path),
        chat_id=require_str(raw, "chat_id", path),
    )


def convert_participant_ids(raw: list[Any], path: str) -> list[ParticipantId]:
    return [
        convert_participant_id(item, f"{path}[{i}]") for i, item in enumerate(raw)
    ]


def convert_formatting(
    raw: Optional[RawFormatting], path: str = "formatting"
) -> Formatting:
    """
    maps formatting flags.

    Only absence defaults: a missing object or flag is False, while a flag
    holding anything but a boolean fails.
    """
    if raw is None:
        return Formatting()
    if not isinstance(raw, dict):
        raise FieldTypeError(path, raw, "an object")
    return Formatting(
        bold=optional_bool(raw, "bold", path),
        italics=optional_bool(raw, "italics", path),
        strikethrough=optional_bool(raw, "strikethrough", path),
        underline=optional_bool(raw, "underline", path),
    )


def convert_address(raw: RawAddress, path: str = "address") -> Address:
    postal = require(raw, "postal_address_v2", path)
    return Address(
        name=optional(postal, "name"),
        street=optional(postal, "street_address"),
        locality=optional(postal, "address_locality"),
        region=optional(postal, "address_region"),
        country=optional(postal, "address_country"),
        postal_code=optional(postal, "postal_code"),
    )


def convert_geo(raw: RawGeo, path: str = "geo") -> Geo:
    coordinates_path = f"{path}.geo_coordinates_v2"
    coordinates = require(raw, "geo_coordinates_v2", path)
    return Geo(
        latitude=decode_float(
            require(coordinates, "latitude", coordinates_path),
            f"{coordinates_path}.latitude",
        ),
        longitude=decode_float(
            require(coordinates, "longitude", coordinates_path),
            f"{coordinates_path}.longitude",
        ),
    )


def convert_representative_image(
    raw: RawRepresentativeImage, path: str = "representative_image"
) -> RepresentativeImage:
    """maps a representative image; width and height are numeric strings."""
    image_path = f"{path}.image_object_v2"
    image = require(raw, "image_object_v2", path)

    width = optional(image, "width")
    height = optional(image, "height")

    return RepresentativeImage(
        id=require(raw, "id", path),
        url=require(image, "url", image_path),
        width=None if width is None else decode_count(width, f"{image_path}.width"),
        height=None if height is None else decode_count(height, f"{image_path}.height"),
        types=list(optional_list(raw, "type", path)),
    )


def convert_thumbnail(raw: RawThumbnail, path: str = "thumbnail") -> Thumbnail:
    return Thumbnail(
        height=decode_count(require(raw, "height_px", path), f"{path}.height_px"),
        width=decode_count(require(raw, "width_px", path), f"{path}.width_px"),
        image_url=require(raw, "image_url", path),
        url=optional(raw, "url"),
    )


def convert_photo(raw: RawPlusPhoto, path: str = "plus_photo") -> Photo:
    return Photo(
        media_type=enums.media_type(
            require(raw, "media_type", path), f"{path}.media_type"
        ),
        thumbnail=convert_thumbnail(
            require(raw, "thumbnail", path), f"{path}.thumbnail"
        ),
        album_id=require(raw, "album_id", path),
        photo_id=require(raw, "photo_id", path),
        url=require(raw, "url", path),
        original_url=require(raw, "original_content_url", path),
        owner_obfuscated_id=require(raw, "owner_obfuscated_id", path),
        stream_ids=list(require_list(raw, "stream_id", path)),
        download_url=optional(raw, "download_url"),
    )


def convert_place(raw: RawPlaceV2, path: str = "place_v2") -> Place:
    return Place(
        url=require(raw, "url", path),
        name=optional(raw, "name"),
        address=convert_address(require(raw, "address", path), f"{path}.address"),
        geo=convert_geo(require(raw, "geo", path), f"{path}.geo"),
        representative_image=convert_representative_image(
            require(raw, "representative_image", path),
            f"{path}.representative_image",
        ),
        place_id=optional(raw, "place_id"),
        cluster_id=optional(raw, "cluster_id"),
        reference_id=optional(raw, "reference_id"),
    )


def convert_thing(raw: RawThingV2, path: str = "thing_v2") -> Thing:
    return Thing(
        url=require(raw, "url", path),
        name=optional(raw, "name"),
        representative_image=convert_representative_image(
            require(raw, "representative_image", path),
            f"{path}.representative_image",
        ),
    )


def convert_embed_item(raw: RawEmbedItem, path: str = "embed_item") -> EmbedItem:
    """
    maps an embed item to at most one photo, place or thing payload.

    Raises:
        TagPayloadMismatch: if more than one payload key is present
    """
    present = [key for key in EMBED_PAYLOAD_KEYS if optional(raw, key) is not None]
    types = list(optional_list(raw, "type", path))
    if len(present) > 1:
        raise TagPayloadMismatch(
            ",".join(types) or "embed_item", present, "more than one attachment payload"
        )

    photo = place = thing = None
    if "plus_photo" in present:
        photo = convert_photo(raw["plus_photo"], f"{path}.plus_photo")
    elif "place_v2" in present:
        place = convert_place(raw["place_v2"], f"{path}.place_v2")
    elif "thing_v2" in present:
        thing = convert_thing(raw["thing_v2"], f"{path}.thing_v2")

    return EmbedItem(
        id=optional(raw, "id"),
        types=types,
        photo=photo,
        place=place,
        thing=thing,
    )


def convert_attachment(
    raw: RawAttachment, path: str = "attachment"
) -> AttachmentSegment:
    return AttachmentSegment(
        id=require(raw, "id", path),
        item=convert_embed_item(require(raw, "embed_item", path), f"{path}.embed_item"),
    )
