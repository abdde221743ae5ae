"""Authoring state for a template's scoring bands.

A coach either picks a named preset or edits a custom band set. The custom
set is kept as an explicit snapshot in ``BandSelection`` so switching to a
preset and back to "custom" restores the coach's work instead of losing it.

Single user, last write wins.

Usage:
    editor = BandEditor()
    editor.update_band("Good", feedback="Solid week, keep it up.")
    editor.select_preset("advanced")
    editor.select_custom()          # the edited custom bands come back
    template = editor.apply(template)
"""

from typing import Any

from pydantic import BaseModel, Field

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.scoring.bands import check_band_partition, sorted_bands
from app.core.scoring.errors import ConfigurationError
from app.core.scoring.presets import CUSTOM, default_custom_bands, get_preset_bands
from app.core.scoring.types import Band, Template

logger = get_logger(__name__)


class BandSelection(BaseModel):
    """Persistable band authoring state of one template."""

    active: str = Field(default=CUSTOM, description="'custom' or a preset name")
    custom_bands: list[Band] = Field(
        default_factory=default_custom_bands,
        description="Most recently edited custom band set",
    )


class BandEditor:
    """Switch between band presets and a cached custom configuration."""

    def __init__(self, selection: BandSelection | None = None):
        if selection is None:
            selection = BandSelection()
            default = get_settings().DEFAULT_BAND_PRESET
            if default != CUSTOM:
                # Validate the configured name before adopting it
                get_preset_bands(default)
                selection.active = default.strip().lower()
        self._selection = selection.model_copy(deep=True)

    @property
    def active(self) -> str:
        return self._selection.active

    @property
    def is_custom(self) -> bool:
        return self._selection.active == CUSTOM

    @property
    def bands(self) -> list[Band]:
        """The band set currently in effect."""
        if self.is_custom:
            return [b.model_copy() for b in self._selection.custom_bands]
        return get_preset_bands(self._selection.active)

    @property
    def custom_bands(self) -> list[Band]:
        return [b.model_copy() for b in self._selection.custom_bands]

    def snapshot(self) -> BandSelection:
        """Copy of the authoring state, for the storage collaborator."""
        return self._selection.model_copy(deep=True)

    def select_preset(self, name: str) -> list[Band]:
        """
        Make a preset the active band set.

        The custom snapshot is left untouched.

        Raises:
            ConfigurationError: If the preset does not exist
        """
        bands = get_preset_bands(name)
        self._selection.active = name.strip().lower()
        logger.debug(f"Band preset selected: {self._selection.active}")
        return bands

    def select_custom(self) -> list[Band]:
        """Return to the most recently edited custom band set."""
        self._selection.active = CUSTOM
        return self.bands

    def replace_custom_bands(self, bands: list[Band]) -> list[Band]:
        """Overwrite the custom snapshot and make it active."""
        self._selection.custom_bands = [b.model_copy() for b in sorted_bands(bands)]
        self._selection.active = CUSTOM
        return self.bands

    def update_band(self, name: str, **changes: Any) -> Band:
        """
        Edit one band of the active set.

        Presets are immutable, so editing while a preset is active copies it
        into the custom snapshot first and switches to custom.

        Args:
            name: Name of the band to edit
            **changes: Band fields to change (name, color, min_score, ...)

        Returns:
            The updated band

        Raises:
            ConfigurationError: If no band has that name or a field is unknown
        """
        unknown = set(changes) - set(Band.model_fields)
        if unknown:
            raise ConfigurationError(f"Unknown band field(s): {', '.join(sorted(unknown))}")

        bands = self.bands
        index = next((i for i, b in enumerate(bands) if b.name == name), None)
        if index is None:
            raise ConfigurationError(f"No band named '{name}' in the active band set")

        if not self.is_custom:
            logger.info(f"Forking preset '{self.active}' into custom bands")
            self._selection.active = CUSTOM

        updated = Band.model_validate({**bands[index].model_dump(), **changes})
        bands[index] = updated
        self._selection.custom_bands = bands
        return updated.model_copy()

    def check(self) -> list[str]:
        """Partition problems of the active band set (empty when valid)."""
        return check_band_partition(self.bands)

    def apply(self, template: Template) -> Template:
        """
        Copy of ``template`` carrying the active bands.

        Raises:
            ConfigurationError: If the result is not a valid template
        """
        data = template.model_dump(exclude_unset=True)
        data["bands"] = [b.model_dump() for b in self.bands]
        return Template.model_validate(data)
