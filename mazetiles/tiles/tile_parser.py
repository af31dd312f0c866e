import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tile_grid import Grid
from .tile_types import TileType
from ..core.constants import MAX_TILE_CODE, MIN_TILE_CODE, ROW_SEPARATOR, TOKEN_SEPARATOR
from ..core.diagnostics import Diagnostics, ParseWarning

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Grid produced by the parser plus the warnings raised while reading it."""
    grid: Grid
    warnings: Diagnostics = field(default_factory=Diagnostics)


class LayoutParser:
    """Parses quarter-level CSV layouts into full mirrored tile grids.

    The authored text describes the top-left quarter of a symmetric level.
    The last authored line is the horizontal centre line of the finished
    level and is not repeated when mirroring vertically; columns are mirrored
    in full, so the finished level has an even width and an odd height.

    Tile codes are single digits. Mirroring works on whole tokens, which for
    single-digit codes is the same as reversing the characters of each line.
    """

    def parse(self, text: str) -> ParseResult:
        """
        Parse layout text into a full grid.

        Args:
            text: Newline-separated rows of comma-separated tile codes, with no
                trailing comma and no blank lines.

        Returns:
            ParseResult with a grid of width 2*M and height 2*N-1 for N lines
            of M tokens. Bad tokens become TileType.EMPTY and are reported in
            the result's warnings; parsing never raises on content.
        """
        warnings = Diagnostics()
        lines = self.mirror_vertically(text.split(ROW_SEPARATOR))
        half_width = len(lines[0].split(TOKEN_SEPARATOR))

        rows: List[List[TileType]] = []
        for y, line in enumerate(lines):
            tokens = self._fit_row(line.split(TOKEN_SEPARATOR), half_width, y, warnings)
            row = []
            for x, token in enumerate(self.mirror_horizontally(tokens)):
                row.append(self._parse_token(token, x, y, warnings))
            rows.append(row)

        grid = Grid(tuple(tuple(row) for row in rows))
        if warnings:
            logger.warning("Layout parsed with %d warning(s) into %dx%d grid",
                           len(warnings), grid.width, grid.height)
        else:
            logger.debug("Layout parsed into %dx%d grid", grid.width, grid.height)
        return ParseResult(grid=grid, warnings=warnings)

    def parse_grid(self, text: str) -> Grid:
        """Parse layout text and return only the grid."""
        return self.parse(text).grid

    @staticmethod
    def mirror_vertically(lines: List[str]) -> List[str]:
        """Append the lines in reverse, skipping the last one (the shared centre row)."""
        return lines + lines[-2::-1]

    @staticmethod
    def mirror_horizontally(tokens: List[str]) -> List[str]:
        """Append the tokens in reverse; every column is repeated."""
        return tokens + tokens[::-1]

    def _fit_row(self, tokens: List[str], half_width: int, y: int,
                 warnings: Diagnostics) -> List[str]:
        """Pad or truncate a row to the width of the first line."""
        if len(tokens) > half_width:
            dropped = TOKEN_SEPARATOR.join(tokens[half_width:])
            warning = warnings.add(ParseWarning(half_width, y, token=dropped,
                                                reason="extra tokens dropped"))
            logger.warning(warning.message)
            return tokens[:half_width]
        if len(tokens) < half_width:
            # Missing tokens are reported per cell when they fail to parse
            return tokens + [""] * (half_width - len(tokens))
        return tokens

    def _parse_token(self, token: str, x: int, y: int, warnings: Diagnostics) -> TileType:
        reason: Optional[str] = None
        try:
            code = int(token)
        except ValueError:
            reason = "missing token" if token == "" else "not an integer"
        else:
            if MIN_TILE_CODE <= code <= MAX_TILE_CODE:
                return TileType(code)
            reason = f"tile code {code} out of range"

        warning = warnings.add(ParseWarning(x, y, token=token, reason=reason))
        logger.warning(warning.message)
        return TileType.EMPTY

    def validate_layout(self, text: str) -> List[str]:
        """
        Validate authored layout text and return list of issues found.
        Advisory only; parse() accepts anything.
        """
        issues = []

        if not text:
            issues.append("Layout is empty")
            return issues

        lines = text.split(ROW_SEPARATOR)
        for y, line in enumerate(lines):
            if not line.strip():
                issues.append(f"Blank line at row {y}")
                continue
            if line.rstrip().endswith(TOKEN_SEPARATOR):
                issues.append(f"Trailing comma at row {y}")
            for x, token in enumerate(line.split(TOKEN_SEPARATOR)):
                stripped = token.strip()
                if len(stripped) != 1 or not stripped.isdigit() or int(stripped) > MAX_TILE_CODE:
                    issues.append(f"Invalid tile code {token!r} at position ({x}, {y})")

        # Check for consistent line lengths
        row_lengths = [len(line.split(TOKEN_SEPARATOR)) for line in lines if line.strip()]
        if len(set(row_lengths)) > 1:
            issues.append(f"Inconsistent row lengths: {row_lengths}")

        return issues

    def quarter_size(self, grid: Grid) -> Tuple[int, int]:
        """Size (columns, rows) of the authored quarter behind a parsed grid."""
        return (grid.width // 2, (grid.height + 1) // 2)
