"""
Layout Registry

Loads the CODA record layouts from JSON configuration files and detects
which layout applies to a line from its leading marker.
"""
import os
import json
import logging
from typing import Dict, List, Optional

from coda.common.models import RecordKind
from ..exceptions import LayoutConfigError
from .layout import FieldDef, FieldKind, RecordLayout

logger = logging.getLogger(__name__)

DEFAULT_LAYOUTS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'layouts')

REQUIRED_KINDS = (
    RecordKind.INITIAL,
    RecordKind.OLD_BALANCE,
    RecordKind.TRANSACTION,
    RecordKind.TRANSACTION_PURPOSE,
)


class LayoutRegistry:
    """
    Registry for CODA record layouts.

    Layouts are loaded and validated once; they never change afterwards,
    so a registry can be shared freely between decoders and threads.
    """

    def __init__(self, layouts_dir: str = None):
        """
        Initialize registry with path to layouts directory.

        Args:
            layouts_dir: Directory containing .json layout files.
                Defaults to the layouts bundled with the package.
        """
        self.layouts_dir = layouts_dir or DEFAULT_LAYOUTS_DIR
        self.layouts: Dict[RecordKind, RecordLayout] = {}
        self._load_layouts()
        # Longest prefixes first: "21"/"22" must win over a one-character match.
        self._by_prefix = sorted(self.layouts.values(), key=lambda l: len(l.prefix), reverse=True)

    def _load_layouts(self) -> None:
        """Scans the directory and loads all .json layouts."""
        if not os.path.isdir(self.layouts_dir):
            raise LayoutConfigError("Layouts directory not found", filename=self.layouts_dir)

        for fname in sorted(os.listdir(self.layouts_dir)):
            if not fname.endswith(".json"):
                continue
            fpath = os.path.join(self.layouts_dir, fname)
            try:
                with open(fpath, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                layout = self._parse_layout(data)
                layout.validate()
            except LayoutConfigError as e:
                logger.error(f"Invalid layout {fname}: {e}")
                raise LayoutConfigError(str(e), filename=fpath) from e
            except (ValueError, KeyError, TypeError) as e:
                logger.error(f"Error loading layout {fname}: {e}")
                raise LayoutConfigError(f"Cannot parse layout: {e}", filename=fpath) from e

            if layout.kind in self.layouts:
                raise LayoutConfigError(f"Duplicate layout for {layout.kind.name}", filename=fpath)
            self.layouts[layout.kind] = layout
            logger.debug(f"Loaded layout: {fname}")

    def _parse_layout(self, data: dict) -> RecordLayout:
        """Converts dict to RecordLayout object."""
        fields = []
        for c in data['fields']:
            c = dict(c)
            c['kind'] = FieldKind(c['kind'])
            if c.get('choices') is not None:
                c['choices'] = tuple(c['choices'])
            c.setdefault('name', '')
            fields.append(FieldDef(**c))

        kind = RecordKind[data['kind']]
        if kind is RecordKind.UNRECOGNIZED:
            raise LayoutConfigError(f"{data['name']}: UNRECOGNIZED cannot have a layout")

        return RecordLayout(
            name=data['name'],
            kind=kind,
            record_length=data['record_length'],
            fields=tuple(fields),
        )

    def get(self, kind: RecordKind) -> RecordLayout:
        """Get the layout for a record kind."""
        layout = self.layouts.get(kind)
        if layout is None:
            raise LayoutConfigError(f"No layout registered for {kind.name}", filename=self.layouts_dir)
        return layout

    def detect(self, line: str) -> Optional[RecordLayout]:
        """
        Detect the layout for a line from its leading marker.

        Returns:
            Matching RecordLayout, or None for unrecognized markers
        """
        for layout in self._by_prefix:
            if line.startswith(layout.prefix):
                return layout
        return None

    def check_complete(self) -> None:
        """Raises LayoutConfigError unless every decodable kind has a layout."""
        missing = [k.name for k in REQUIRED_KINDS if k not in self.layouts]
        if missing:
            raise LayoutConfigError(f"Missing layouts: {', '.join(missing)}", filename=self.layouts_dir)

    def list_layouts(self) -> List[str]:
        """List all available layout names."""
        return [l.name for l in self.layouts.values()]
