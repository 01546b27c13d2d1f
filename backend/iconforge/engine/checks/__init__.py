"""Rule checks. Importing this package registers every rule, in module order."""

from iconforge.engine.checks import canvas, composition, document, enterprise, stroke, style  # noqa: F401
