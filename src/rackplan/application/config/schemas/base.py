"""Base enums and version constants for layout document schemas.

The enums are the domain's own ``(str, Enum)`` / ``(int, Enum)`` types so
that documents and domain objects share one vocabulary.
"""

from rackplan.domain.value_objects import DeviceFace, FormFactor, RackWidth

# Supported schema versions for layout documents
# Version 1.0: Single rack with placed devices and embedded device types
# Version 1.1: Added rack numbering settings (desc_units, starting_unit)
# Version 1.2: Added editor settings (history depth)
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1", "1.2"})

CURRENT_VERSION = "1.2"

DeviceFaceConfig = DeviceFace
RackWidthConfig = RackWidth
FormFactorConfig = FormFactor
