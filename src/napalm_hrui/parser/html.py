"""Base HTML parsing utilities shared across all parsers.

Every page parser reduces to "locate a table, walk its rows, convert each
cell".  The helpers here own the fragile parts of that: where a table sits
on a page, how sentinel strings are told apart from numbers, and what
happens when a cell does not parse.

Table positions mirror the firmware's page layout and live only in this
module, so a layout change is fixed in one constant.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from napalm_hrui.client.errors import HRUIFieldNotFoundError, HRUIParseError

logger = logging.getLogger(__name__)

# Table positions understood by extract_table().
FIRST_TABLE: int = 0
LAST_TABLE: int = -1
# port.cgi: the status table is the third table inside the page fieldset.
PORT_SETTINGS_SELECTOR: str = "body center fieldset table"
PORT_SETTINGS_TABLE: int = 2

_PORT_NAME_RE: re.Pattern[str] = re.compile(r"^Port\s*(\d+)$", re.IGNORECASE)


def parse_html(html: str | bytes, parser: str = "lxml") -> BeautifulSoup:
    """Parse an HTML document and return a BeautifulSoup tree.

    Args:
        html: Raw HTML content from the switch response.
        parser: Parser library to use (default: ``lxml``).

    Returns:
        Parsed BeautifulSoup document.

    Raises:
        HRUIParseError: If the body is empty or the parser rejects it.
    """
    if not html or not html.strip():
        raise HRUIParseError("Empty HTML document")
    try:
        return BeautifulSoup(html, parser)
    except ParserRejectedMarkup as exc:
        raise HRUIParseError(f"Malformed HTML document: {exc}") from exc


def normalize_text(s: str) -> str:
    """Strip surrounding whitespace and collapse internal runs.

    Args:
        s: Raw text extracted from an HTML element.

    Returns:
        Cleaned string with single spaces between words.
    """
    return re.sub(r"\s+", " ", s).strip()


def cell_text(tag: Tag) -> str:
    return normalize_text(tag.get_text())


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def find_table(
    doc: BeautifulSoup | Tag,
    selector: str = "table",
    index: int = LAST_TABLE,
) -> Tag:
    """Return the table at position *index* among matches of *selector*.

    Raises:
        HRUIFieldNotFoundError: If no table sits at that position.
    """
    tables = doc.select(selector)
    try:
        return tables[index]
    except IndexError:
        raise HRUIFieldNotFoundError(
            f"No table at index {index} for selector {selector!r} "
            f"({len(tables)} found)"
        ) from None


def table_rows(table: Tag) -> list[Tag]:
    """Return the ``<tr>`` rows of *table*, excluding rows of nested tables."""
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def extract_table(
    doc: BeautifulSoup | Tag,
    selector: str = "table",
    index: int = LAST_TABLE,
    skip_rows: int = 1,
    min_cells: int = 0,
    exact_cells: int | None = None,
) -> list[list[str]]:
    """Extract cell text from one table, row by row.

    Pages often hold an editable form table followed by a read-only status
    table; callers pick the table by position (``LAST_TABLE`` by default)
    rather than by content.

    Args:
        doc: Parsed document or subtree.
        selector: CSS selector listing candidate tables.
        index: Position of the table among the matches.
        skip_rows: Number of leading header rows to drop.
        min_cells: Drop rows with fewer ``<td>`` cells than this.
        exact_cells: If set, drop rows whose ``<td>`` count differs.

    Returns:
        One list of normalised ``<td>`` texts per kept row.

    Raises:
        HRUIFieldNotFoundError: If the table is absent.
    """
    table = find_table(doc, selector, index)
    rows: list[list[str]] = []
    for tr in table_rows(table)[skip_rows:]:
        cells = [cell_text(td) for td in tr.find_all("td")]
        if exact_cells is not None and len(cells) != exact_cells:
            continue
        if len(cells) < min_cells:
            continue
        rows.append(cells)
    return rows


def extract_labeled_rows(doc: BeautifulSoup | Tag, selector: str = "table tr") -> dict[str, str]:
    """Return ``{th text: td text}`` for every row holding both cells."""
    result: dict[str, str] = {}
    for tr in doc.select(selector):
        th = tr.find("th")
        td = tr.find("td")
        if th is None or td is None:
            continue
        result[cell_text(th)] = cell_text(td)
    return result


def extract_labeled_value(doc: BeautifulSoup | Tag, label: str) -> str:
    """Return the text of the ``<td>`` following the ``<th>`` containing *label*.

    Raises:
        HRUIFieldNotFoundError: If no such label exists or its value is empty.
    """
    for th in doc.find_all("th"):
        if label in th.get_text():
            td = th.find_next_sibling("td")
            if td is not None and cell_text(td):
                return cell_text(td)
    raise HRUIFieldNotFoundError(f"No value for label {label!r}")


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseOptions:
    """How :func:`parse_int` converts a cell to an integer.

    Build variants fluently, e.g.
    ``ParseOptions().with_prefix("Port ").with_offset(-1)``.

    Attributes:
        trim_prefix: Prefix removed before conversion (e.g. ``"Port "``).
        trim_suffix: Suffix removed before conversion (e.g. ``" Sec"``).
        default: Value returned when conversion fails or a special case
            matches without ``none_on_special``.
        offset: Added to successfully parsed values and to the failure
            fallback, but not to special cases.
        special_cases: Strings (compared after trimming) that short-circuit
            conversion, such as ``"Off"`` or ``"N/A"``.
        none_on_special: Return ``None`` instead of *default* for a special case.
        log_errors: Log conversion failures at debug level.
    """

    trim_prefix: str = ""
    trim_suffix: str = ""
    default: int = 0
    offset: int = 0
    special_cases: frozenset[str] = frozenset()
    none_on_special: bool = False
    log_errors: bool = True

    def with_prefix(self, prefix: str) -> ParseOptions:
        return dataclasses.replace(self, trim_prefix=prefix)

    def with_suffix(self, suffix: str) -> ParseOptions:
        return dataclasses.replace(self, trim_suffix=suffix)

    def with_default(self, default: int) -> ParseOptions:
        return dataclasses.replace(self, default=default)

    def with_offset(self, offset: int) -> ParseOptions:
        return dataclasses.replace(self, offset=offset)

    def with_special_cases(self, *cases: str, none: bool = False) -> ParseOptions:
        return dataclasses.replace(
            self,
            special_cases=self.special_cases | frozenset(cases),
            none_on_special=none or self.none_on_special,
        )

    def quiet(self) -> ParseOptions:
        return dataclasses.replace(self, log_errors=False)


DEFAULT_OPTIONS: ParseOptions = ParseOptions()
PORT_NAME_OPTIONS: ParseOptions = ParseOptions().with_prefix("Port ")
RATE_OPTIONS: ParseOptions = ParseOptions().with_special_cases("Off", "Auto", none=True)


def parse_int(raw: str | None, options: ParseOptions = DEFAULT_OPTIONS) -> int | None:
    """Convert *raw* to an integer according to *options*.

    Never raises: a value that is neither numeric nor a special case yields
    ``options.default + options.offset``.

    Returns:
        The parsed value, or ``None`` for a special case when
        ``options.none_on_special`` is set.
    """
    value = (raw or "").strip()
    if options.trim_prefix and value.startswith(options.trim_prefix):
        value = value[len(options.trim_prefix):]
    if options.trim_suffix and value.endswith(options.trim_suffix):
        value = value[: -len(options.trim_suffix)]
    value = value.strip()

    if value in options.special_cases:
        return None if options.none_on_special else options.default

    try:
        return int(value) + options.offset
    except ValueError:
        if options.log_errors:
            logger.debug("Cannot parse %r as integer; using default %d", raw, options.default)
        return options.default + options.offset


def parse_port_number(name: str) -> int | None:
    """Return N for ``"Port N"``, ``None`` for anything else (e.g. ``"Trunk1"``)."""
    m = _PORT_NAME_RE.match(name.strip())
    return int(m.group(1)) if m else None


# ---------------------------------------------------------------------------
# Form controls
# ---------------------------------------------------------------------------


def _selected_option(doc: BeautifulSoup | Tag, selector: str) -> Tag:
    select = doc.select_one(selector)
    if select is None:
        raise HRUIFieldNotFoundError(f"No <select> matching {selector!r}")
    option = select.find("option", selected=True)
    if option is None:
        raise HRUIFieldNotFoundError(f"No selected option in {selector!r}")
    return option


def extract_selected(doc: BeautifulSoup | Tag, selector: str) -> str:
    """Return the text of the selected ``<option>`` of the ``<select>`` at *selector*.

    Raises:
        HRUIFieldNotFoundError: If the select is missing or nothing is selected.
    """
    return cell_text(_selected_option(doc, selector))


def extract_selected_value(doc: BeautifulSoup | Tag, selector: str) -> str:
    """Like :func:`extract_selected`, but return the option's ``value`` attribute."""
    option = _selected_option(doc, selector)
    value = option.get("value")
    if value is None:
        raise HRUIFieldNotFoundError(f"Selected option in {selector!r} has no value")
    return str(value).strip()


def extract_options(doc: BeautifulSoup | Tag, selector: str) -> list[tuple[str, str]]:
    """Return ``(text, value)`` for every ``<option>`` matching *selector*."""
    return [
        (cell_text(opt), str(opt.get("value", "")).strip())
        for opt in doc.select(selector)
    ]


def extract_attr(doc: BeautifulSoup | Tag, selector: str, attr: str = "value") -> str:
    """Return attribute *attr* of the first element matching *selector*.

    Raises:
        HRUIFieldNotFoundError: If the element or the attribute is absent.
    """
    element = doc.select_one(selector)
    if element is None:
        raise HRUIFieldNotFoundError(f"No element matching {selector!r}")
    value = element.get(attr)
    if value is None:
        raise HRUIFieldNotFoundError(f"Element {selector!r} has no {attr!r} attribute")
    return str(value).strip()


def extract_int_attr(doc: BeautifulSoup | Tag, selector: str, attr: str = "value") -> int:
    """Return attribute *attr* of *selector* as an integer.

    Unlike :func:`parse_int`, a non-numeric value here means the page is not
    what we expect, so it raises.

    Raises:
        HRUIFieldNotFoundError: If the element is absent or not numeric.
    """
    raw = extract_attr(doc, selector, attr)
    try:
        return int(raw)
    except ValueError:
        raise HRUIFieldNotFoundError(
            f"Attribute {attr!r} of {selector!r} is not an integer: {raw!r}"
        ) from None


def is_checked(element: Tag) -> bool:
    return element.has_attr("checked")


# ---------------------------------------------------------------------------
# Port lists
# ---------------------------------------------------------------------------


def expand_port_list(text: str) -> list[str]:
    """Expand a member string such as ``"1-3,Trunk2"`` to port names.

    Numeric items and ranges become ``"Port N"`` names; named entries such as
    trunks are kept verbatim.  ``"-"`` and ``""`` mean no members.
    """
    text = text.strip()
    if text in ("", "-"):
        return []
    names: list[str] = []
    for item in (part.strip() for part in text.split(",")):
        if not item:
            continue
        start, sep, end = item.partition("-")
        if sep and start.strip().isdigit() and end.strip().isdigit():
            names.extend(f"Port {n}" for n in range(int(start), int(end) + 1))
        elif item.isdigit():
            names.append(f"Port {int(item)}")
        else:
            names.append(item)
    return names


def expand_port_numbers(text: str) -> list[int]:
    """Expand ``"2,6"`` / ``"2-6"`` to 1-based port numbers, ignoring names."""
    return [
        n
        for n in (parse_port_number(name) for name in expand_port_list(text))
        if n is not None
    ]
