"""imprint template package — prepare once, render many times."""

from imprint.template.core import PreparedTemplate, RenderOptions, prepare_template, render

__all__ = [
    "PreparedTemplate",
    "RenderOptions",
    "prepare_template",
    "render",
]
