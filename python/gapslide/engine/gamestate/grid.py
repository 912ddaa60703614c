"""Piece registry and the cell index kept in step with it."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from gapslide.engine.topology import Topology
from gapslide.models.board import BoardConfig, Coord
from gapslide.models.piece import Cell, Piece

logger = logging.getLogger(__name__)

# id -> (x, y, is_gap)
Snapshot = dict[str, tuple[int, int, bool]]


class GridIntegrityError(RuntimeError):
    """Two footprints claim the same cell, or a cell is left uncovered."""


class PuzzleGrid:
    """Owns every piece and a dense ``cells[y][x]`` lookup of who covers what.

    Pieces are created once and never reallocated; moves only rewrite their
    coordinates and the handful of cells they touch.
    """

    def __init__(self, config: BoardConfig, pieces: list[Piece]) -> None:
        self.config = config
        self.topology = Topology.from_config(config)
        self.width = config.width
        self.height = config.height
        self.pieces = pieces
        self.by_id: dict[str, Piece] = {p.id: p for p in pieces}
        if len(self.by_id) != len(pieces):
            raise GridIntegrityError("Duplicate piece ids in registry.")
        self.cells: list[list[Cell | None]] = []
        self.rebuild()

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_config(cls, config: BoardConfig) -> PuzzleGrid:
        """Create every piece at its home cell.

        Large pieces come first, then large gaps, then small pieces and small
        gaps in row-major order.
        """
        config.validate()
        cover = config.large_cover()
        small_gaps = set(config.small_gaps)

        pieces: list[Piece] = []
        for i, (x, y) in enumerate(config.large_pieces):
            pieces.append(Piece.at_home(f"B{i}", False, True, x, y))
        for i, (x, y) in enumerate(config.large_gaps):
            pieces.append(Piece.at_home(f"BG{i}", True, True, x, y))

        s_idx = g_idx = 0
        for y in range(config.height):
            for x in range(config.width):
                if (x, y) in cover:
                    continue
                if (x, y) in small_gaps:
                    pieces.append(Piece.at_home(f"G{g_idx}", True, False, x, y))
                    g_idx += 1
                else:
                    pieces.append(Piece.at_home(f"S{s_idx}", False, False, x, y))
                    s_idx += 1
        return cls(config, pieces)

    # -- index maintenance ----------------------------------------------------

    def rebuild(self) -> None:
        """Re-tag every cell from the registry.  O(width × height)."""
        self.cells = [[None] * self.width for _ in range(self.height)]
        for piece in self.pieces:
            for (x, y), (ox, oy) in zip(self.footprint_cells(piece), piece.offsets):
                current = self.cells[y][x]
                if current is not None:
                    raise GridIntegrityError(
                        f"{piece.id} and {current.piece_id} both cover ({x}, {y})."
                    )
                self.cells[y][x] = piece.tag(ox, oy)

    def clear_footprint(self, piece: Piece) -> None:
        for x, y in self.footprint_cells(piece):
            cell = self.cells[y][x]
            if cell is not None and cell.piece_id == piece.id:
                self.cells[y][x] = None

    def write_footprint(self, piece: Piece) -> None:
        for (x, y), (ox, oy) in zip(self.footprint_cells(piece), piece.offsets):
            self.cells[y][x] = piece.tag(ox, oy)

    # -- queries --------------------------------------------------------------

    def lookup(self, piece_id: str) -> Piece:
        return self.by_id[piece_id]

    def footprint_cells(
        self, piece: Piece, x: int | None = None, y: int | None = None
    ) -> list[Coord]:
        """Normalised cells *piece* covers at its position, or at (*x*, *y*)."""
        return [self.topology.normalize(cx, cy) for cx, cy in piece.footprint(x, y)]

    def cell(self, x: int, y: int) -> Cell | None:
        """Occupancy tag at (*x*, *y*), wrapping first; ``None`` if off the board."""
        x, y = self.topology.normalize(x, y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def occupant(self, x: int, y: int) -> Piece | None:
        cell = self.cell(x, y)
        return None if cell is None else self.by_id[cell.piece_id]

    def gaps(self) -> list[Piece]:
        return [p for p in self.pieces if p.is_gap]

    def gap_at(self, x: int, y: int) -> Piece | None:
        piece = self.occupant(x, y)
        return piece if piece is not None and piece.is_gap else None

    def is_solved(self) -> bool:
        """Every entity, gaps included, sits on its home cell."""
        return all(p.is_home for p in self.pieces)

    def check_integrity(self) -> bool:
        """True if every footprint cell names its piece and no cell is empty."""
        expected: dict[Coord, str] = {}
        for piece in self.pieces:
            for c in self.footprint_cells(piece):
                if c in expected:
                    return False
                expected[c] = piece.id
        for y in range(self.height):
            for x in range(self.width):
                cell = self.cells[y][x]
                if cell is None or expected.get((x, y)) != cell.piece_id:
                    return False
                if cell.is_gap != self.by_id[cell.piece_id].is_gap:
                    return False
        return True

    def iter_cells(self) -> Iterator[tuple[int, int, Cell | None]]:
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                yield x, y, cell

    # -- snapshots ------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return {p.id: (p.x, p.y, p.is_gap) for p in self.pieces}

    def restore(self, snapshot: Snapshot) -> None:
        for piece in self.pieces:
            piece.x, piece.y, piece.is_gap = snapshot[piece.id]
        self.rebuild()
        logger.debug("Restored %d pieces from snapshot", len(snapshot))

    def identities(self) -> list[tuple[Coord, bool]]:
        """Sorted (home, is_large) pairs; moves must never change this."""
        return sorted((p.home, p.is_large) for p in self.pieces)

    def pieces_at(self, coords: Iterable[Coord]) -> list[Piece | None]:
        return [self.occupant(x, y) for x, y in coords]
