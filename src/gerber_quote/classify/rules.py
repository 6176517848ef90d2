"""Filename rules for assigning manufacturing roles.

Rules are tried in order against the lowercased basename and the first match
wins, so more specific rules (exact CAD extensions, side+function pairs) come
before generic ones (a bare "top" or "drill").
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..schema.roles import Role, Side

# Non-fabrication files that are never worth classifying or sniffing
IGNORED_EXTENSIONS = frozenset({
    "log", "err", "fdl", "py", "sh", "md", "rst", "zip", "pdf", "svg", "ps",
    "png", "jpg", "jpeg", "bmp", "csv", "xls", "xlsx", "doc", "docx", "html",
    "rep", "rul", "ldp", "apr", "extrep", "xy", "pos", "pnp", "bom", "cpl",
})  # fmt: skip

ROLE_SIDES: dict[Role, Side] = {
    Role.TOP_COPPER: Side.TOP,
    Role.TOP_MASK: Side.TOP,
    Role.TOP_SILK: Side.TOP,
    Role.TOP_PASTE: Side.TOP,
    Role.BOTTOM_COPPER: Side.BOTTOM,
    Role.BOTTOM_MASK: Side.BOTTOM,
    Role.BOTTOM_SILK: Side.BOTTOM,
    Role.BOTTOM_PASTE: Side.BOTTOM,
}


def side_for(role: Role) -> Side:
    return ROLE_SIDES.get(role, Side.NONE)


@dataclass(frozen=True)
class FilenameRule:
    """One entry of the filename rule table."""

    name: str
    pattern: re.Pattern[str]
    role: Role

    def matches(self, basename: str) -> bool:
        return self.pattern.search(basename) is not None


def _rule(name: str, regex: str, role: Role) -> FilenameRule:
    return FilenameRule(name=name, pattern=re.compile(regex), role=role)


def _ext(name: str, extensions: str, role: Role) -> FilenameRule:
    return _rule(name, rf"\.(?:{extensions})$", role)


def _both(name: str, first: str, second: str, role: Role) -> FilenameRule:
    """Match names containing both alternatives, in either order."""
    return _rule(name, rf"^(?=.*(?:{first}))(?=.*(?:{second}))", role)


_TOP = r"(?<!s)top|front|(?<![a-z])f(?=[._-])"
_BOTTOM = r"bot(?:tom)?|back|(?<![a-z])b(?=[._-])"
_MASK = r"(?:solder)?mask|resist|stop"
_SILK = r"silk|legend|overlay|symbol"
_PASTE = r"paste|cream|stencil"
_COPPER = r"copper|(?<![a-z])cu(?![a-z])|signal|layer"

FILENAME_RULES: tuple[FilenameRule, ...] = (
    # Protel / Altium extensions
    _ext("protel-top-copper", "gtl", Role.TOP_COPPER),
    _ext("protel-bottom-copper", "gbl", Role.BOTTOM_COPPER),
    _ext("protel-top-mask", "gts", Role.TOP_MASK),
    _ext("protel-bottom-mask", "gbs", Role.BOTTOM_MASK),
    _ext("protel-top-silk", "gto", Role.TOP_SILK),
    _ext("protel-bottom-silk", "gbo", Role.BOTTOM_SILK),
    _ext("protel-top-paste", "gtp", Role.TOP_PASTE),
    _ext("protel-bottom-paste", "gbp", Role.BOTTOM_PASTE),
    _ext("protel-outline", "gko|gm1|gml|gm", Role.OUTLINE),
    _ext("protel-mechanical", r"gm\d+|gd\d*|gg\d*", Role.MECHANICAL),
    _ext("protel-inner", r"g\d+|gp\d+", Role.INNER_COPPER),
    # KiCad layer names
    _rule("kicad-inner-copper", r"(?<![a-z])in\d+[._]cu", Role.INNER_COPPER),
    _rule("kicad-top-copper", r"(?<![a-z])f[._]cu", Role.TOP_COPPER),
    _rule("kicad-bottom-copper", r"(?<![a-z])b[._]cu", Role.BOTTOM_COPPER),
    _rule("kicad-top-mask", r"(?<![a-z])f[._]mask", Role.TOP_MASK),
    _rule("kicad-bottom-mask", r"(?<![a-z])b[._]mask", Role.BOTTOM_MASK),
    _rule("kicad-top-silk", r"(?<![a-z])f[._]silks", Role.TOP_SILK),
    _rule("kicad-bottom-silk", r"(?<![a-z])b[._]silks", Role.BOTTOM_SILK),
    _rule("kicad-top-paste", r"(?<![a-z])f[._]paste", Role.TOP_PASTE),
    _rule("kicad-bottom-paste", r"(?<![a-z])b[._]paste", Role.BOTTOM_PASTE),
    _rule("kicad-outline", r"edge[._]cuts", Role.OUTLINE),
    # Eagle CAM processor extensions
    _ext("eagle-top-copper", "cmp|top", Role.TOP_COPPER),
    _ext("eagle-bottom-copper", "sol|bot", Role.BOTTOM_COPPER),
    _ext("eagle-top-mask", "stc|tsm", Role.TOP_MASK),
    _ext("eagle-bottom-mask", "sts|bsm", Role.BOTTOM_MASK),
    _ext("eagle-top-silk", "plc|tsk", Role.TOP_SILK),
    _ext("eagle-bottom-silk", "pls|bsk", Role.BOTTOM_SILK),
    _ext("eagle-top-paste", "crc", Role.TOP_PASTE),
    _ext("eagle-bottom-paste", "crs", Role.BOTTOM_PASTE),
    _ext("eagle-outline", "dim|oln|outline", Role.OUTLINE),
    _ext("drill-extension", "drl|drd|drr|xln|exc|nc|tap|drill", Role.DRILL),
    # Side + function words anywhere in the name
    _both("top-mask", _TOP, _MASK, Role.TOP_MASK),
    _both("bottom-mask", _BOTTOM, _MASK, Role.BOTTOM_MASK),
    _both("top-silk", _TOP, _SILK, Role.TOP_SILK),
    _both("bottom-silk", _BOTTOM, _SILK, Role.BOTTOM_SILK),
    _both("top-paste", _TOP, _PASTE, Role.TOP_PASTE),
    _both("bottom-paste", _BOTTOM, _PASTE, Role.BOTTOM_PASTE),
    _both("top-copper", _TOP, _COPPER, Role.TOP_COPPER),
    _both("bottom-copper", _BOTTOM, _COPPER, Role.BOTTOM_COPPER),
    # Function words alone
    _rule("outline", r"outline|edge|profile|border|contour|dimension", Role.OUTLINE),
    _rule("drill", r"drill|drl|n?pth|holes?(?![a-z])|excellon", Role.DRILL),
    _rule("mechanical", r"mech|fab(?:rication)?|keepout|assembly", Role.MECHANICAL),
    _rule("inner-copper", r"inner|(?<![a-z])(?:in|l)\d+(?![0-9])|plane", Role.INNER_COPPER),
    # A bare side word usually names the copper layer
    _rule("top-side", r"(?<!s)top|front", Role.TOP_COPPER),
    _rule("bottom-side", r"bot(?:tom)?|back", Role.BOTTOM_COPPER),
)


def match_filename(basename: str) -> FilenameRule | None:
    """Return the first rule matching the lowercased ``basename``, if any."""
    for rule in FILENAME_RULES:
        if rule.matches(basename):
            return rule
    return None


# X2 ``.FileFunction`` first field -> (role for top, role for bottom, side-less role)
_FILE_FUNCTIONS: dict[str, tuple[Role, Role, Role | None]] = {
    "copper": (Role.TOP_COPPER, Role.BOTTOM_COPPER, Role.INNER_COPPER),
    "soldermask": (Role.TOP_MASK, Role.BOTTOM_MASK, None),
    "legend": (Role.TOP_SILK, Role.BOTTOM_SILK, None),
    "paste": (Role.TOP_PASTE, Role.BOTTOM_PASTE, None),
}


def role_from_file_function(fields: list[str]) -> Role | None:
    """Map the fields of an X2 ``.FileFunction`` attribute to a role."""
    if not fields:
        return None
    function = fields[0].lower()
    if function == "profile":
        return Role.OUTLINE
    if function in ("plated", "nonplated"):
        return Role.DRILL
    if function in ("drillmap", "fabricationdrawing", "assemblydrawing", "other"):
        return Role.MECHANICAL
    if function not in _FILE_FUNCTIONS:
        return None

    top, bottom, sideless = _FILE_FUNCTIONS[function]
    sides = {f.lower() for f in fields[1:]}
    if "top" in sides:
        return top
    if "bot" in sides:
        return bottom
    return sideless
