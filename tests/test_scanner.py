import unittest

from wordsearch.core.constants import Direction, SCAN_DIRECTIONS
from wordsearch.engine.grid import GridConfig, WordSearchGrid
from wordsearch.engine.scanner import BannedScanner


def grid_from_rows(*rows: str) -> WordSearchGrid:
    grid = WordSearchGrid(GridConfig(rows=len(rows), cols=len(rows[0])))
    for r, row in enumerate(rows):
        for c, letter in enumerate(row):
            if letter != ".":
                grid.set_letter(r, c, letter)
    return grid


class FullScanTests(unittest.TestCase):
    def test_finds_word_in_every_scan_direction(self) -> None:
        for direction in SCAN_DIRECTIONS:
            with self.subTest(direction=direction):
                grid = WordSearchGrid(GridConfig(rows=5, cols=5))
                grid.place_word("CAT", 2, 2, direction)
                hit = BannedScanner(["CAT"]).find_banned(grid)
                self.assertIsNotNone(hit)
                assert hit is not None
                self.assertEqual((hit.word, hit.row, hit.col, hit.direction), ("CAT", 2, 2, direction))

    def test_reverse_reading_is_banned_too(self) -> None:
        grid = grid_from_rows("TAC", "...", "...")
        hit = BannedScanner(["CAT"]).find_banned(grid)
        assert hit is not None
        self.assertEqual((hit.row, hit.col, hit.direction), (0, 2, Direction.WEST))

    def test_anti_diagonal_is_scanned(self) -> None:
        grid = grid_from_rows("..C", ".A.", "T..")
        scanner = BannedScanner(["CAT"])
        hit = scanner.find_banned(grid)
        assert hit is not None
        self.assertEqual(hit.direction, Direction.SOUTH_WEST)

    def test_clean_grid_and_case_sensitivity(self) -> None:
        grid = grid_from_rows("cat", "DOG", "XYZ")
        scanner = BannedScanner(["CAT", "GOLD"])
        self.assertFalse(scanner.contains_banned(grid))

    def test_empty_banned_strings_are_ignored(self) -> None:
        scanner = BannedScanner(["", "AB", "AB"])
        self.assertEqual(scanner.words, ("AB",))
        self.assertFalse(BannedScanner([""]))


class SingleCellTests(unittest.TestCase):
    def test_safe_letters_exclude_completing_letters(self) -> None:
        # T finishes "CA_" in the row; C finishes "_AT" read upwards.
        grid = grid_from_rows("..T", "..A", "CA.")
        scanner = BannedScanner(["CAT"])
        self.assertTrue(scanner.completes_banned(grid, 2, 2, "T"))
        self.assertTrue(scanner.completes_banned(grid, 2, 2, "C"))
        self.assertFalse(scanner.completes_banned(grid, 2, 2, "A"))
        self.assertEqual(scanner.safe_letters(grid, 2, 2, ["C", "A", "T", "A"]), ["A", "A"])

    def test_middle_letter_of_run(self) -> None:
        grid = grid_from_rows("C.T")
        scanner = BannedScanner(["CAT"])
        self.assertEqual(scanner.unsafe_letters(grid, 0, 1), {"A"})

    def test_single_letter_banned_word(self) -> None:
        grid = grid_from_rows("..")
        scanner = BannedScanner(["Q"])
        self.assertEqual(scanner.safe_letters(grid, 0, 0, ["Q", "R"]), ["R"])

    def test_partial_runs_do_not_block(self) -> None:
        grid = grid_from_rows("C..")
        scanner = BannedScanner(["CAT"])
        self.assertEqual(scanner.safe_letters(grid, 0, 1, ["A", "T"]), ["A", "T"])

    def test_touches_banned_checks_written_cells(self) -> None:
        grid = grid_from_rows("CAT", "...")
        scanner = BannedScanner(["AT"])
        self.assertTrue(scanner.touches_banned(grid, [(0, 0), (0, 1), (0, 2)]))
        self.assertFalse(BannedScanner(["DOG"]).touches_banned(grid, [(0, 1)]))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
