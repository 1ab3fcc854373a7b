"""
Scryfall card metadata shapes.

The collection endpoint returns full card objects. Only the fields we
merge are modelled; everything else is ignored. A card carries its
images either as one unified `image_uris` object or, for multi-faced
layouts (transform, modal_dfc, ...), per face under `card_faces`.
These two shapes are separate models behind a discriminated union so
that a card with neither is rejected at validation time.

API docs: https://scryfall.com/docs/api/cards
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter

from manaimport.models.inventory import ImageSet, ImageUris


class ScryfallImageUris(BaseModel):
    """The three image sizes we keep."""

    model_config = ConfigDict(extra="ignore")

    small: str
    normal: str
    large: str

    def to_image_uris(self) -> ImageUris:
        return ImageUris(small=self.small, normal=self.normal, large=self.large)


class ScryfallCardFace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    image_uris: ScryfallImageUris


class _ScryfallCardBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    set: str
    set_name: str
    rarity: str
    layout: str


class SingleImageCard(_ScryfallCardBase):
    """Card whose images are exposed as one unified set."""

    image_uris: ScryfallImageUris

    def image_set(self) -> ImageSet:
        return ImageSet(front=self.image_uris.to_image_uris())


class MultiFaceCard(_ScryfallCardBase):
    """Card whose images are exposed per face."""

    card_faces: list[ScryfallCardFace] = Field(min_length=1)

    def image_set(self) -> ImageSet:
        front = self.card_faces[0].image_uris.to_image_uris()
        back = None
        if len(self.card_faces) > 1:
            back = self.card_faces[1].image_uris.to_image_uris()
        return ImageSet(front=front, back=back)


def _card_shape(value: Any) -> str | None:
    """
    Pick the image shape of a raw card payload.

    A unified `image_uris` wins over `card_faces`, matching Scryfall's
    own precedence for split and adventure cards which carry both.
    Returns None for unknown shapes so validation fails.
    """
    if isinstance(value, dict):
        if value.get("image_uris") is not None:
            return "single"
        if value.get("card_faces"):
            return "faces"
        return None
    if isinstance(value, SingleImageCard):
        return "single"
    if isinstance(value, MultiFaceCard):
        return "faces"
    return None


ScryfallCard = Annotated[
    Annotated[SingleImageCard, Tag("single")] | Annotated[MultiFaceCard, Tag("faces")],
    Discriminator(_card_shape),
]

scryfall_card_adapter: TypeAdapter[SingleImageCard | MultiFaceCard] = TypeAdapter(ScryfallCard)


def parse_card(payload: Any) -> SingleImageCard | MultiFaceCard:
    """
    Validate one raw card object from the collection endpoint.

    Raises:
        pydantic.ValidationError: If the payload has neither image shape
            or is missing a merged field
    """
    return scryfall_card_adapter.validate_python(payload)
