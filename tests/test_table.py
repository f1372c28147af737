import unittest

from waste_manifest_reporter.core.filtering import filter_rows, parse_numeric_filter
from waste_manifest_reporter.core.grouping import group_manifests
from waste_manifest_reporter.core.model import ManifestSummary
from waste_manifest_reporter.core.paging import has_next, has_prev, paginate, sort_rows, total_pages
from waste_manifest_reporter.core.table import ManifestTable


def _summary(num, p=0, haz=0, non=0, codes=(), date="", gen=""):
    return ManifestSummary(
        manifest_num=num, ship_date=date, generator_name=gen, epa_codes=tuple(codes),
        p_waste=p, haz_waste=haz, non_haz_waste=non, line_items=(),
    )


def _rows(n, **extra):
    return [
        {"Manifest #": f"0{i:03d}", "UOM": "Lbs", "Lbs": str(i), "Ship Date": f"2024-01-{1 + i % 28:02d}", **extra}
        for i in range(n)
    ]


class FilterTests(unittest.TestCase):
    def setUp(self):
        self.rows = [
            _summary("001", p=0, haz=150, gen="Acme Corp", codes=("P001", "D001")),
            _summary("002", p=20, haz=115, gen="Beta LLC"),
            _summary("003", p=0, haz=200, non=5, gen="acme west"),
            _summary("004", haz=-2, gen=None),
        ]

    def test_no_filter_returns_everything(self):
        self.assertEqual(self.rows, filter_rows(self.rows))
        self.assertEqual(self.rows, filter_rows(self.rows, "haz_waste", ""))
        self.assertEqual(self.rows, filter_rows(self.rows, None, ">1"))

    def test_numeric_comparisons(self):
        def nums(text):
            return [r.manifest_num for r in filter_rows(self.rows, "haz_waste", text)]

        self.assertEqual(["001", "003"], nums(">=150"))
        self.assertEqual(["003"], nums(">150"))
        self.assertEqual(["002", "004"], nums("<150"))
        self.assertEqual(["001", "002", "004"], nums("<=150"))
        self.assertEqual(["002"], nums("= 115"))
        self.assertEqual(["002"], nums("==115"))
        self.assertEqual(["001", "003", "004"], nums("!=115"))
        self.assertEqual(["004"], nums("<-1"))
        self.assertEqual(["001", "003"], nums(">=149.5"))

    def test_numeric_column_falls_back_to_substring(self):
        self.assertEqual([], filter_rows(self.rows, "haz_waste", "abc"))
        # non-ASCII digits are plain text, not a comparison
        self.assertEqual([], filter_rows(self.rows, "haz_waste", ">٣"))
        self.assertEqual(["001", "002"], [r.manifest_num for r in filter_rows(self.rows, "haz_waste", "15")])
        self.assertEqual(["003"], [r.manifest_num for r in filter_rows(self.rows, "non_haz_waste", "5")])

    def test_text_columns_match_case_insensitively(self):
        self.assertEqual(["001", "003"], [r.manifest_num for r in filter_rows(self.rows, "generator_name", "ACME")])
        self.assertEqual(["001"], [r.manifest_num for r in filter_rows(self.rows, "epa_codes", "p001, d")])
        # comparison syntax means nothing on text columns
        self.assertEqual([], filter_rows(self.rows, "manifest_num", ">1"))

    def test_missing_value_never_matches(self):
        self.assertNotIn("004", [r.manifest_num for r in filter_rows(self.rows, "generator_name", "n")])

    def test_filter_is_idempotent(self):
        for column, text in [("haz_waste", ">=150"), ("generator_name", "acme"), ("p_waste", "2")]:
            once = filter_rows(self.rows, column, text)
            self.assertEqual(once, filter_rows(once, column, text))

    def test_unknown_column(self):
        with self.assertRaises(KeyError):
            filter_rows(self.rows, "weight", "1")

    def test_parse_numeric_filter(self):
        self.assertIsNone(parse_numeric_filter("150"))
        self.assertIsNone(parse_numeric_filter(">= 1.5x"))
        self.assertIsNone(parse_numeric_filter("=>5"))
        self.assertIsNone(parse_numeric_filter(">٣"))
        op, num = parse_numeric_filter("!=-0.5")
        self.assertEqual(-0.5, num)
        self.assertTrue(op(1, num))


class SortTests(unittest.TestCase):
    def test_numeric_sort_keeps_ties_in_input_order(self):
        rows = [_summary("a", haz=5), _summary("b", haz=3), _summary("c", haz=5)]
        self.assertEqual(["b", "a", "c"], [r.manifest_num for r in sort_rows(rows, "haz_waste", "asc")])
        self.assertEqual(["a", "c", "b"], [r.manifest_num for r in sort_rows(rows, "haz_waste", "desc")])

    def test_descending_is_reverse_of_ascending_without_ties(self):
        rows = [_summary(n, p=v) for n, v in [("a", 4), ("b", 1), ("c", 9), ("d", 0)]]
        asc = sort_rows(rows, "p_waste", "asc")
        desc = sort_rows(rows, "p_waste", "desc")
        self.assertEqual(list(reversed(desc)), asc)

    def test_ship_date_sorts_chronologically_with_invalid_dates_after_valid(self):
        rows = [
            _summary("jan", date="01/15/2024"),
            _summary("dec", date="2023-12-01"),
            _summary("bad", date="not a date"),
            _summary("feb", date="2024-02-01"),
            _summary("none", date=""),
        ]
        asc = [r.manifest_num for r in sort_rows(rows, "ship_date", "asc")]
        desc = [r.manifest_num for r in sort_rows(rows, "ship_date", "desc")]
        self.assertEqual(["dec", "jan", "feb", "bad", "none"], asc)
        self.assertEqual(["bad", "none", "feb", "jan", "dec"], desc)

    def test_text_sort_is_case_insensitive(self):
        rows = [_summary("1", gen="beta"), _summary("2", gen="Alpha"), _summary("3", gen=None),
                _summary("4", gen="gamma")]
        self.assertEqual(["3", "2", "1", "4"],
                         [r.manifest_num for r in sort_rows(rows, "generator_name", "asc")])

    def test_bad_order_and_column(self):
        with self.assertRaises(ValueError):
            sort_rows([_summary("a")], "haz_waste", "up")
        with self.assertRaises(KeyError):
            sort_rows([_summary("a")], "weight", "asc")

    def test_sort_does_not_mutate_input(self):
        rows = [_summary("b", haz=2), _summary("a", haz=1)]
        sort_rows(rows, "haz_waste", "asc")
        self.assertEqual(["b", "a"], [r.manifest_num for r in rows])


class PaginationTests(unittest.TestCase):
    def test_total_pages(self):
        self.assertEqual(1, total_pages(0, 10))
        self.assertEqual(1, total_pages(10, 10))
        self.assertEqual(2, total_pages(11, 10))
        with self.assertRaises(ValueError):
            total_pages(3, 0)

    def test_pages_cover_every_row_once(self):
        rows = [_summary(str(i)) for i in range(23)]
        for size in (1, 5, 7, 23, 40):
            pages = total_pages(len(rows), size)
            seen = []
            for page in range(pages):
                seen.extend(paginate(rows, page, size).page_rows)
            self.assertEqual(rows, seen)

    def test_page_beyond_end_is_empty_not_clamped(self):
        rows = [_summary(str(i)) for i in range(3)]
        page = paginate(rows, 5, 2)
        self.assertEqual((), page.page_rows)
        self.assertEqual(5, page.page)
        self.assertEqual(2, page.total_pages)

    def test_boundary_guards(self):
        self.assertFalse(has_prev(0))
        self.assertTrue(has_prev(1))
        self.assertTrue(has_next(0, 2))
        self.assertFalse(has_next(1, 2))
        self.assertFalse(has_next(0, 1))


class ManifestTableTests(unittest.TestCase):
    def test_default_sort_is_newest_ship_date_first(self):
        rows = [
            {"Manifest #": "001", "Ship Date": "2024-01-01"},
            {"Manifest #": "002", "Ship Date": "2024-03-01"},
        ]
        view = ManifestTable(rows).view()
        self.assertEqual(["002", "001"], [r.manifest_num for r in view.rows])

    def test_toggle_sort(self):
        table = ManifestTable(_rows(3))
        table.toggle_sort("haz_waste")
        self.assertEqual(("haz_waste", "asc"), (table.sort_by, table.sort_order))
        self.assertEqual([0, 1, 2], [r.haz_waste for r in table.view().rows])
        table.toggle_sort("haz_waste")
        self.assertEqual("desc", table.sort_order)
        self.assertEqual([2, 1, 0], [r.haz_waste for r in table.view().rows])
        table.toggle_sort("manifest_num")
        self.assertEqual(("manifest_num", "asc"), (table.sort_by, table.sort_order))

    def test_navigation_stops_at_boundaries(self):
        table = ManifestTable(_rows(25), page_size=10)
        table.prev_page()
        self.assertEqual(0, table.view().page)
        table.next_page()
        table.next_page()
        table.next_page()
        view = table.view()
        self.assertEqual(2, view.page)
        self.assertEqual(3, view.total_pages)
        self.assertEqual(5, len(view.page_rows))
        table.prev_page()
        self.assertEqual(1, table.view().page)

    def test_page_resets_when_row_count_or_page_size_changes(self):
        table = ManifestTable(_rows(25), page_size=10)
        table.next_page()
        table.set_filter("haz_waste", ">=5")
        self.assertEqual(0, table.view().page)

        table.next_page()
        self.assertEqual(1, table.view().page)
        table.set_page_size(5)
        self.assertEqual(0, table.view().page)

    def test_page_kept_when_only_sort_changes(self):
        table = ManifestTable(_rows(25), page_size=10)
        table.next_page()
        table.toggle_sort("haz_waste")
        self.assertEqual(1, table.view().page)

    def test_filter_column_selection(self):
        table = ManifestTable(_rows(5))
        table.set_filter("haz_waste", ">2")
        self.assertEqual(2, len(table.view().rows))
        table.select_filter_column("haz_waste")
        self.assertEqual(">2", table.filter_text)
        table.select_filter_column("manifest_num")
        self.assertEqual("", table.filter_text)
        self.assertEqual(5, len(table.view().rows))
        table.set_filter("manifest_num", "0001")
        table.clear_filter()
        self.assertIsNone(table.filter_column)
        self.assertEqual(5, len(table.view().rows))

    def test_grouping_is_cached_until_reload(self):
        rows = _rows(4, UOM="kg")
        table = ManifestTable(rows)
        first = table.grouping
        self.assertIs(first, table.grouping)
        self.assertEqual(group_manifests(rows), first)
        self.assertTrue(table.unit_warning)

        table.load(_rows(2))
        self.assertIsNot(first, table.grouping)
        self.assertEqual(2, len(table.summaries))
        self.assertFalse(table.unit_warning)

    def test_wip_groups_for_displayed_manifest(self):
        rows = [
            {"Manifest #": "010VES", "WIP": "B", "Ln": "2", "Lbs": "3", "UOM": "lb"},
            {"Manifest #": "010VES", "WIP": "A", "Ln": "1", "Lbs": "4", "UOM": "Lbs"},
        ]
        table = ManifestTable(rows)
        [(summary, groups)] = table.wip_groups("010")
        self.assertEqual(2, len(summary.line_items))
        self.assertEqual(["A", "B"], [g.wip for g in groups])
        self.assertEqual([4, 3], [g.total_weight for g in groups])
        self.assertEqual([], table.wip_groups("999"))

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            ManifestTable(page_size=0)
        with self.assertRaises(ValueError):
            ManifestTable(sort_order="sideways")
        with self.assertRaises(KeyError):
            ManifestTable(sort_by="weight")
        with self.assertRaises(KeyError):
            ManifestTable().toggle_sort("weight")

    def test_wip_groups_for_every_manifest_sharing_a_display_id(self):
        rows = [
            {"Manifest #": "001", "WIP": "A", "Ln": "1", "Lbs": "5", "UOM": "Lbs"},
            {"Manifest #": "001VES", "WIP": "B", "Ln": "1", "Lbs": "8", "UOM": "Lbs"},
        ]
        table = ManifestTable(rows)
        self.assertEqual(["001", "001"], [s.manifest_num for s in table.summaries])

        matches = table.wip_groups("001")
        self.assertEqual(2, len(matches))
        self.assertEqual([["A"], ["B"]], [[g.wip for g in groups] for _, groups in matches])
        self.assertEqual([5, 8], [groups[0].total_weight for _, groups in matches])
        self.assertIs(table.summaries[1], matches[1][0])
