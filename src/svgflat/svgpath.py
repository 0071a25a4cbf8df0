"""Parsing of SVG path data strings"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, List, Optional, Tuple

from svgflat.common import get_arity
from svgflat.path_data import PathCommand, PathData

logger = logging.getLogger(__name__)

# Result of a sub-parse step: the parsed value and the cursor behind it, or None on a syntax error
_Parsed = Optional[Tuple[float, "ParseCursor"]]


@dataclass(frozen=True)
class ParseCursor:
    """Parser state threaded through each parse step.

    Attributes:
        index: Offset of the next character to read
        end: Length of the parsed text
        prev_cmd: Previously parsed command letter, used for implicit command repetition
    """

    index: int
    end: int
    prev_cmd: Optional[str] = None

    @property
    def has_more_data(self) -> bool:
        """True if there are characters left to parse."""
        return self.index < self.end


class SvgPathParser:
    """
    This class provides a collection of static methods to parse SVG path data strings.
    Parsing follows the SVG 1.1 path grammar. On the first syntax error parsing stops
    and the commands parsed so far are returned, i.e. parsing never fails.
    Commands (command : number of values : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc   4: Ss
        QuadraticBezier:  4: Qq   2: Tt
        ArcCurve:         7: Aa
        ClosePath:        0: Zz
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmLlHhVvCcSsQqTtAaZz"
    # Both closepath letters map to "Z", all other letters keep their case
    CMD_MAP: ClassVar[Dict[str, str]] = {c: ("Z" if c in "Zz" else c) for c in "MmLlHhVvCcSsQqTtAaZz"}
    # Characters that may start a number
    NUMBER_START: ClassVar[str] = "+-.0123456789"
    # Whitespace according to the path grammar
    SPACES: ClassVar[str] = " \t\n\r\f"

    @staticmethod
    def parse(text: Optional[str]) -> PathData:
        """Parse the given SVG path data string into a list of PathCommands.

        An empty string gives an empty list. A path not starting with a MoveTo gives
        an empty list. A syntax error truncates the result before the invalid command.

        Args:
            text (str): SVG path data, e.g. the "d" attribute of a path element

        Returns:
            PathData: the parsed commands
        """
        if not text:
            return []
        cursor = SvgPathParser._skip_optional_spaces(text, ParseCursor(0, len(text)))
        path_data: List[PathCommand] = []
        if not SvgPathParser._initial_command_is_move_to(text, cursor):
            logger.debug("Path data does not start with a MoveTo: %r", text[:20])
            return path_data
        while cursor.has_more_data:
            result = SvgPathParser.parse_segment(text, cursor)
            if result is None:
                logger.debug("Path data truncated at offset %d (%r)", cursor.index, text[cursor.index])
                break
            (segment, cursor) = result
            path_data.append(segment)
        return path_data

    @staticmethod
    def parse_segment(text: str, cursor: ParseCursor) -> Optional[Tuple[PathCommand, ParseCursor]]:
        """Parse the command starting at _cursor_.

        A number where a command letter is expected repeats the previous command
        (a MoveTo repeats as LineTo of the same case, a ClosePath cannot repeat).

        Returns:
            Optional[Tuple[PathCommand, ParseCursor]]: the command and the cursor behind it,
                or None if the command is invalid
        """
        char = text[cursor.index]
        cmd = SvgPathParser.CMD_MAP.get(char)
        if cmd is None:
            # Implicit command, not allowed as first command or after a closepath
            if cursor.prev_cmd is None or cursor.prev_cmd == "Z" or char not in SvgPathParser.NUMBER_START:
                return None
            if cursor.prev_cmd == "M":
                cmd = "L"
            elif cursor.prev_cmd == "m":
                cmd = "l"
            else:
                cmd = cursor.prev_cmd
        else:
            cursor = replace(cursor, index=cursor.index + 1)
        cursor = replace(cursor, prev_cmd=cmd)

        if cmd == "Z":
            return PathCommand("Z"), SvgPathParser._skip_optional_spaces(text, cursor)

        values: List[float] = []
        for i in range(get_arity(cmd)):
            # 4th and 5th operand of an arc are flags
            if cmd in "Aa" and i in (3, 4):
                result = SvgPathParser._parse_arc_flag(text, cursor)
            else:
                result = SvgPathParser._parse_number(text, cursor)
            if result is None:
                return None
            (value, cursor) = result
            values.append(value)
        return PathCommand(cmd, tuple(values)), cursor

    @staticmethod
    def _initial_command_is_move_to(text: str, cursor: ParseCursor) -> bool:
        # An empty path is still valid
        if not cursor.has_more_data:
            return True
        return text[cursor.index] in "Mm"

    @staticmethod
    def _skip_optional_spaces(text: str, cursor: ParseCursor) -> ParseCursor:
        index = cursor.index
        while index < cursor.end and text[index] in SvgPathParser.SPACES:
            index += 1
        return replace(cursor, index=index)

    @staticmethod
    def _skip_optional_spaces_or_delimiter(text: str, cursor: ParseCursor) -> ParseCursor:
        """Skip whitespace and at most one comma."""
        if cursor.has_more_data and text[cursor.index] not in SvgPathParser.SPACES and text[cursor.index] != ",":
            return cursor
        cursor = SvgPathParser._skip_optional_spaces(text, cursor)
        if cursor.has_more_data and text[cursor.index] == ",":
            cursor = SvgPathParser._skip_optional_spaces(text, replace(cursor, index=cursor.index + 1))
        return cursor

    @staticmethod
    def _parse_number(text: str, cursor: ParseCursor) -> _Parsed:
        """Parse a number according to the SVG number grammar.

        sign? digits? ("." digits)? (("e"|"E") sign? digits)?
        The integer part is accumulated right-to-left. An "e" followed by "x" or "m"
        is a unit suffix (ex, em) and not an exponent.
        """
        end = cursor.end
        start_index = cursor.index
        i = SvgPathParser._skip_optional_spaces(text, cursor).index
        sign = 1
        if i < end and text[i] == "+":
            i += 1
        elif i < end and text[i] == "-":
            i += 1
            sign = -1

        # The first character of a number must be one of [0-9+-.]
        if i == end or (not "0" <= text[i] <= "9" and text[i] != "."):
            return None

        # Integer part, build right-to-left
        integer = 0
        start_int_part = i
        while i < end and "0" <= text[i] <= "9":
            i += 1
        multiplier = 1
        for scan in range(i - 1, start_int_part - 1, -1):
            integer += multiplier * (ord(text[scan]) - 48)
            multiplier *= 10

        # Decimals
        decimal = 0.0
        if i < end and text[i] == ".":
            i += 1
            # There must be at least one digit following the "."
            if i >= end or not "0" <= text[i] <= "9":
                return None
            frac = 1.0
            while i < end and "0" <= text[i] <= "9":
                frac *= 10
                decimal += (ord(text[i]) - 48) / frac
                i += 1

        # Exponent
        exponent = 0
        expsign = 1
        if i != start_index and i + 1 < end and text[i] in "eE" and text[i + 1] not in "xm":
            i += 1
            if text[i] == "+":
                i += 1
            elif text[i] == "-":
                i += 1
                expsign = -1
            # There must be an exponent
            if i >= end or not "0" <= text[i] <= "9":
                return None
            while i < end and "0" <= text[i] <= "9":
                exponent = exponent * 10 + (ord(text[i]) - 48)
                i += 1

        if i == start_index:
            return None
        try:
            number = (integer + decimal) * sign
            if exponent:
                number *= 10.0 ** (expsign * exponent)
        except OverflowError:
            logger.debug("Number out of range at offset %d", start_index)
            return None

        return float(number), SvgPathParser._skip_optional_spaces_or_delimiter(text, replace(cursor, index=i))

    @staticmethod
    def _parse_arc_flag(text: str, cursor: ParseCursor) -> _Parsed:
        """Parse an arc flag, only the single characters "0" and "1" are valid."""
        if not cursor.has_more_data:
            return None
        flag_char = text[cursor.index]
        if flag_char not in "01":
            return None
        cursor = replace(cursor, index=cursor.index + 1)
        return float(flag_char == "1"), SvgPathParser._skip_optional_spaces_or_delimiter(text, cursor)
