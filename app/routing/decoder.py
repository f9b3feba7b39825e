import re

from app.routing.models import DecodedName

# <lot>_<sequence>_<name>, e.g. "1A_2_some_name.png" -> stored as "some_name.png"
_NAMED_SEQUENCE = re.compile(r"(?P<sequence>[0-9]+)_(?P<name>.+)", re.DOTALL)
# <lot>_<sequence><suffix>, e.g. "1A_11.jpg" -> stored unchanged
_UNNAMED_SEQUENCE = re.compile(r"(?P<sequence>[0-9]+)[^_0-9][^_]*", re.DOTALL)


def _has_stem(name: str) -> bool:
    """True when the name is more than a bare extension such as ".jpg"."""
    stem, dot, _extension = name.rpartition(".")
    return bool(stem) if dot else bool(name)


class FilenameDecoder:
    """Decodes the lot number and sequence embedded in an uploaded filename.

    The lot number is everything before the first underscore. The sequence is
    the digit run right after it, and must be followed either by another
    underscore and a name that is more than a bare extension, or by a suffix
    without underscores (usually just the extension). Any other shape leaves
    the sequence unset and keeps the filename untouched. Decoding never raises.
    """

    def decode(self, filename: str) -> DecodedName:
        prefix, separator, remainder = filename.partition("_")
        if not separator:
            return DecodedName(
                owner_key_candidate=prefix,
                sequence=None,
                stored_filename=filename,
            )

        named = _NAMED_SEQUENCE.fullmatch(remainder)
        if named is not None and _has_stem(named.group("name")):
            return DecodedName(
                owner_key_candidate=prefix,
                sequence=int(named.group("sequence")),
                stored_filename=named.group("name"),
            )

        unnamed = _UNNAMED_SEQUENCE.fullmatch(remainder)
        if unnamed is not None:
            return DecodedName(
                owner_key_candidate=prefix,
                sequence=int(unnamed.group("sequence")),
                stored_filename=filename,
            )

        return DecodedName(
            owner_key_candidate=prefix,
            sequence=None,
            stored_filename=filename,
        )
