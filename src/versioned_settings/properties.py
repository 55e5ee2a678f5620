"""Setting descriptors and the values loaded for them."""

from pydantic import BaseModel, ConfigDict, field_validator


class SettingsProperty(BaseModel):
    """A named setting the host application wants persisted."""

    model_config = ConfigDict(frozen=True)

    name: str
    default_value: str | None = None  # Serialized default, used when nothing is stored

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Require a non-empty setting name."""
        v = v.strip()
        if not v:
            raise ValueError("Setting name must not be empty")
        return v


class SettingsPropertyValue:
    """Serialized value of one setting plus its dirty flag.

    ``serialized_value`` is None when nothing is stored, which is distinct from
    an empty string. Assigning ``property_value`` marks the value dirty so the
    next save persists it. Values built with ``use_default=False`` report None
    instead of the property default while nothing is stored.
    """

    def __init__(
        self,
        property: SettingsProperty,
        serialized_value: str | None = None,
        is_dirty: bool = False,
        use_default: bool = True,
    ):
        self.property = property
        self.serialized_value = serialized_value
        self.is_dirty = is_dirty
        self.use_default = use_default

    @classmethod
    def absent(cls, property: SettingsProperty) -> "SettingsPropertyValue":
        """Value representing "nothing stored" for a property, ignoring its default."""
        return cls(property, serialized_value=None, is_dirty=False, use_default=False)

    @property
    def name(self) -> str:
        return self.property.name

    @property
    def is_present(self) -> bool:
        return self.serialized_value is not None

    @property
    def property_value(self) -> str | None:
        if self.serialized_value is None:
            return self.property.default_value if self.use_default else None
        return self.serialized_value

    @property_value.setter
    def property_value(self, value: str | None) -> None:
        self.serialized_value = value
        self.is_dirty = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SettingsPropertyValue):
            return NotImplemented
        return (
            self.property == other.property
            and self.serialized_value == other.serialized_value
            and self.is_dirty == other.is_dirty
        )

    def __repr__(self) -> str:
        return (
            f"SettingsPropertyValue(name={self.name!r}, "
            f"serialized_value={self.serialized_value!r}, is_dirty={self.is_dirty})"
        )
