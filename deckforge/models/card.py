"""
Card records as fetched from the catalog.

Catalog payloads are loosely shaped JSON. `Card.from_catalog` is the single
ingestion point: it validates required fields and normalizes optional ones
so nothing downstream has to guard against missing keys.
"""

from dataclasses import dataclass, field
from typing import Any


class CardSchemaError(ValueError):
    """A catalog payload does not describe a valid card."""


@dataclass(frozen=True, slots=True)
class CardImage:
    """One artwork entry for a card."""

    id: int
    image_url: str
    image_url_small: str | None = None
    image_url_cropped: str | None = None


def _optional_int(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise CardSchemaError(f"Field '{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CardSchemaError(f"Field '{key}' must be an integer, got {value!r}") from e


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return str(value) if value is not None else None


@dataclass(frozen=True, slots=True)
class Card:
    """
    An immutable card snapshot.

    Attributes:
        id: Catalog passcode, unique within the catalog
        name: Display name
        type: Free-text type tag (e.g. "Effect Monster", "Spell Card")
        desc: Card text
        atk, defense, level, linkval, scale: Optional numeric stats
        race, attribute, archetype: Optional descriptive tags
        images: Artwork entries, first one is the default printing
        restrictions: Restriction status per format {"tcg": "Limited", ...}
    """

    id: int
    name: str
    type: str
    desc: str = ""
    atk: int | None = None
    defense: int | None = None
    level: int | None = None
    linkval: int | None = None
    scale: int | None = None
    race: str | None = None
    attribute: str | None = None
    archetype: str | None = None
    images: tuple[CardImage, ...] = ()
    restrictions: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_catalog(cls, payload: Any) -> "Card":
        """
        Build a Card from a catalog JSON object.

        Raises:
            CardSchemaError: If a required field is missing or mistyped
        """
        if not isinstance(payload, dict):
            raise CardSchemaError("Card payload must be an object")

        card_id = payload.get("id")
        if isinstance(card_id, bool) or not isinstance(card_id, int | str):
            raise CardSchemaError("Card payload is missing an integer 'id'")
        try:
            card_id = int(card_id)
        except ValueError as e:
            raise CardSchemaError(f"Card id {card_id!r} is not an integer") from e

        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise CardSchemaError(f"Card {card_id} has no name")

        card_type = payload.get("type")
        if not isinstance(card_type, str):
            raise CardSchemaError(f"Card {card_id} has no type")

        raw_images = payload.get("card_images") or []
        if not isinstance(raw_images, list):
            raise CardSchemaError(f"Card {card_id} has a non-list 'card_images'")

        images: list[CardImage] = []
        for image in raw_images:
            if not isinstance(image, dict) or not image.get("image_url"):
                continue
            images.append(
                CardImage(
                    id=_optional_int(image, "id") or card_id,
                    image_url=str(image["image_url"]),
                    image_url_small=_optional_str(image, "image_url_small"),
                    image_url_cropped=_optional_str(image, "image_url_cropped"),
                )
            )

        # "ban_tcg": "Limited" -> ("tcg", "Limited")
        banlist = payload.get("banlist_info") or {}
        if not isinstance(banlist, dict):
            raise CardSchemaError(f"Card {card_id} has a non-object 'banlist_info'")
        restrictions = tuple(
            sorted(
                (key.removeprefix("ban_"), str(status))
                for key, status in banlist.items()
                if isinstance(key, str) and key.startswith("ban_") and status
            )
        )

        return cls(
            id=card_id,
            name=name.strip(),
            type=card_type,
            desc=str(payload.get("desc") or ""),
            atk=_optional_int(payload, "atk"),
            defense=_optional_int(payload, "def"),
            level=_optional_int(payload, "level"),
            linkval=_optional_int(payload, "linkval"),
            scale=_optional_int(payload, "scale"),
            race=_optional_str(payload, "race"),
            attribute=_optional_str(payload, "attribute"),
            archetype=_optional_str(payload, "archetype"),
            images=tuple(images),
            restrictions=restrictions,
        )

    def to_catalog(self) -> dict[str, Any]:
        """Serialize back to the catalog JSON shape (used for persistence)."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "desc": self.desc,
        }
        optional = {
            "atk": self.atk,
            "def": self.defense,
            "level": self.level,
            "linkval": self.linkval,
            "scale": self.scale,
            "race": self.race,
            "attribute": self.attribute,
            "archetype": self.archetype,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        payload["card_images"] = [
            {
                "id": image.id,
                "image_url": image.image_url,
                "image_url_small": image.image_url_small,
                "image_url_cropped": image.image_url_cropped,
            }
            for image in self.images
        ]
        if self.restrictions:
            payload["banlist_info"] = {f"ban_{fmt}": status for fmt, status in self.restrictions}
        return payload

    def restriction(self, fmt: str) -> str | None:
        """Restriction status for a format, if the catalog reported one."""
        return dict(self.restrictions).get(fmt)

    @property
    def thumbnail_url(self) -> str | None:
        """Cropped artwork if available, else the full card image."""
        if not self.images:
            return None
        first = self.images[0]
        return first.image_url_cropped or first.image_url
