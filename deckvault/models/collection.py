from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Condition(str, Enum):
    """Physical condition grade of an owned card."""

    MINT = "M"
    NEAR_MINT = "NM"
    LIGHTLY_PLAYED = "LP"
    MODERATELY_PLAYED = "MP"
    HEAVILY_PLAYED = "HP"
    DAMAGED = "DMG"


class CollectionEntry(BaseModel):
    """
    A physical card the user owns.

    Identity is (scryfall_id, foil): foil and non-foil copies of the same
    printing are separate entries. Serialized with camelCase aliases, which
    is the persisted format.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    scryfall_id: str
    name: str
    set_code: str = Field(alias="set")
    set_name: str = ""
    quantity: int
    foil: bool = False
    condition: Condition = Condition.NEAR_MINT
    image_uri: str | None = None
    mana_cost: str | None = None
    type_line: str = ""
    colors: tuple[str, ...] = ()
    added_at: str

    @property
    def key(self) -> tuple[str, bool]:
        """Stock-keeping identity of this entry."""
        return (self.scryfall_id, self.foil)
