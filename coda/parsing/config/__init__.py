# Configuration submodule
from .layout import FieldDef, FieldKind, RecordLayout
from .registry import LayoutRegistry

__all__ = ['FieldDef', 'FieldKind', 'RecordLayout', 'LayoutRegistry']
