"""Process-wide crop geometry."""
from dataclasses import dataclass

from constants import (
    MM_PER_INCH, DEFAULT_TARGET_DIAMETER_MM, DEFAULT_EXPORT_DPI,
    DEFAULT_PREVIEW_DIAMETER_PX, DEFAULT_OFFSET_MAPPING,
    OFFSET_MAPPING_LEGACY, OFFSET_MAPPINGS
)


def output_diameter_for(target_mm, export_dpi):
    """Export side in pixels for a physical diameter at the given DPI.

    40mm at 96 DPI -> 151px.
    """
    return int(round(target_mm / MM_PER_INCH * export_dpi))


@dataclass(frozen=True)
class GeometryConfig:
    """Preview and export geometry shared by the controller, preview and compositor.

    The preview viewport and the export surface are both squares holding the
    crop disc. Offsets are captured in preview pixels; `offset_factor` maps
    them onto the export surface.
    """
    preview_diameter_px: int = DEFAULT_PREVIEW_DIAMETER_PX
    target_diameter_mm: float = DEFAULT_TARGET_DIAMETER_MM
    export_dpi: float = DEFAULT_EXPORT_DPI
    offset_mapping: str = DEFAULT_OFFSET_MAPPING

    def __post_init__(self):
        if self.preview_diameter_px <= 0:
            raise ValueError(f"preview_diameter_px must be positive, got {self.preview_diameter_px}")
        if self.target_diameter_mm <= 0 or self.export_dpi <= 0:
            raise ValueError("target_diameter_mm and export_dpi must be positive")
        if self.offset_mapping not in OFFSET_MAPPINGS:
            raise ValueError(f"Unknown offset mapping {self.offset_mapping!r}, expected one of {OFFSET_MAPPINGS}")
        if self.output_diameter_px <= 0:
            raise ValueError("Geometry yields an empty export surface")

    @property
    def output_diameter_px(self):
        return output_diameter_for(self.target_diameter_mm, self.export_dpi)

    @property
    def preview_to_output(self):
        """Ratio between export and preview pixels."""
        return self.output_diameter_px / self.preview_diameter_px

    @property
    def offset_factor(self):
        """Multiplier applied to preview offsets on the export surface."""
        if self.offset_mapping == OFFSET_MAPPING_LEGACY:
            return 1.0
        return self.preview_to_output

    @classmethod
    def from_settings(cls, settings):
        """Build geometry from a config dict, falling back to defaults for missing keys."""
        settings = settings or {}
        return cls(
            preview_diameter_px=int(settings.get('preview_diameter_px', DEFAULT_PREVIEW_DIAMETER_PX)),
            target_diameter_mm=float(settings.get('target_diameter_mm', DEFAULT_TARGET_DIAMETER_MM)),
            export_dpi=float(settings.get('export_dpi', DEFAULT_EXPORT_DPI)),
            offset_mapping=settings.get('offset_mapping', DEFAULT_OFFSET_MAPPING),
        )

    def to_settings(self):
        return {
            'preview_diameter_px': self.preview_diameter_px,
            'target_diameter_mm': self.target_diameter_mm,
            'export_dpi': self.export_dpi,
            'offset_mapping': self.offset_mapping,
        }
