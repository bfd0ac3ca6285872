"""The marker placed on declarations that should embed a text resource."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileStream:
    """Marks a string declaration as holding the contents of a text resource.

    The marker is inert at runtime. Place it inside ``typing.Annotated``::

        class Licenses:
            LICENSE: Annotated[str, FileStream("license.txt")]

    or use it as the assigned value of a ``str`` annotated name::

        BANNER: str = FileStream("banner.txt")

    The ``mezzanine build`` step reads ``path`` (relative to the resource root)
    and generates ``Mezzanine.Licenses.LICENSE`` holding the file's text.
    """
    path: str

    def __call__(self, target):
        # Allows decorator usage; such declarations are discovered but never generated.
        return target
