import unittest

from wordsearch.core.constants import Direction
from wordsearch.core.exceptions import ConfigurationError, PlacementError
from wordsearch.engine.grid import GridConfig, WordSearchGrid


class GridPlacementTests(unittest.TestCase):
    def test_new_grid_is_empty(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=3, cols=4))
        self.assertEqual(grid.filled_count, 0)
        self.assertEqual(len(list(grid.empty_cells())), 12)
        self.assertEqual(grid.to_rows(empty="."), ["....", "....", "...."])

    def test_rejects_non_positive_dimensions(self) -> None:
        for rows, cols in ((0, 3), (3, 0), (-1, 2)):
            with self.assertRaises(ConfigurationError):
                WordSearchGrid(GridConfig(rows=rows, cols=cols))

    def test_line_stays_in_bounds(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=3, cols=3))
        self.assertEqual(grid.line(0, 0, Direction.SOUTH_EAST, 3), [(0, 0), (1, 1), (2, 2)])
        self.assertEqual(grid.line(2, 2, Direction.NORTH_WEST, 3), [(2, 2), (1, 1), (0, 0)])
        self.assertIsNone(grid.line(0, 1, Direction.EAST, 3))
        self.assertIsNone(grid.line(0, 0, Direction.NORTH, 2))

    def test_place_word_writes_letters_along_direction(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=4, cols=4))
        placed = grid.place_word("CAT", 3, 3, Direction.WEST)
        self.assertEqual(placed.cells, [(3, 3), (3, 2), (3, 1)])
        self.assertEqual(grid.to_rows(empty="."), ["....", "....", "....", ".TAC"])
        self.assertEqual(grid.read(3, 3, Direction.WEST, 3), "CAT")

    def test_overlap_on_matching_letter_is_allowed(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=3, cols=3))
        grid.place_word("CAT", 0, 1, Direction.SOUTH)
        self.assertTrue(grid.can_place("BAD", 1, 0, Direction.EAST))
        grid.place_word("BAD", 1, 0, Direction.EAST)
        self.assertEqual(grid.filled_count, 5)
        self.assertEqual(grid.to_rows(empty="."), [".C.", "BAD", ".T."])

    def test_conflicting_letter_is_rejected(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=3, cols=3))
        grid.place_word("CAT", 0, 0, Direction.EAST)
        self.assertFalse(grid.can_place("DOG", 0, 0, Direction.SOUTH))
        with self.assertRaises(PlacementError):
            grid.place_word("DOG", 0, 0, Direction.SOUTH)
        with self.assertRaises(PlacementError):
            grid.place_word("LONG", 0, 0, Direction.EAST)

    def test_undo_restores_shared_letters(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=3, cols=3))
        grid.place_word("CAT", 0, 1, Direction.SOUTH)
        _, undo = grid.place_word_undoable("BAD", 1, 0, Direction.EAST)
        undo()
        self.assertEqual(grid.to_rows(empty="."), [".C.", ".A.", ".T."])
        self.assertEqual(grid.filled_count, 3)
        self.assertEqual([p.text for p in grid.placed_words], ["CAT"])

    def test_read_returns_none_across_empty_cells(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=1, cols=3))
        grid.set_letter(0, 0, "A")
        self.assertIsNone(grid.read(0, 0, Direction.EAST, 2))
        grid.set_letter(0, 1, "B")
        self.assertEqual(grid.read(0, 0, Direction.EAST, 2), "AB")

    def test_snapshot_and_restore(self) -> None:
        grid = WordSearchGrid(GridConfig(rows=2, cols=2))
        grid.place_word("AB", 0, 0, Direction.EAST)
        snapshot = grid.snapshot()
        grid.set_letter(1, 0, "X")
        grid.set_letter(1, 1, "Y")
        self.assertTrue(grid.is_complete)
        grid.restore(snapshot)
        self.assertEqual(grid.to_rows(empty="."), ["AB", ".."])
        self.assertEqual(grid.filled_count, 2)
        self.assertEqual(len(grid.placed_words), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
