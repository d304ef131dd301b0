import unittest

from mindmap_builder.graph import build_mind_map
from mindmap_builder.parser import parse_text
from mindmap_builder.view_state import ViewState


def _node_id(graph, label: str) -> str:
    return next(node.node_id for node in graph if node.label == label)


class ViewStateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = build_mind_map(parse_text("# Plan\n## Goals\n- Grow users\n## Roadmap\n### Beta launch"))
        self.view = ViewState(self.graph)

    def test_toggle_collapse_twice_restores_state(self) -> None:
        goals = _node_id(self.graph, "Goals")

        self.view.toggle_collapse(goals)
        self.assertEqual(self.view.collapsed_ids, {goals})
        self.assertTrue(self.graph.get(goals).collapsed)

        self.view.toggle_collapse(goals)
        self.assertEqual(self.view.collapsed_ids, set())

    def test_collapse_does_not_change_structure(self) -> None:
        goals = _node_id(self.graph, "Goals")
        children_before = list(self.graph.get(goals).children)

        self.view.toggle_collapse(goals)

        self.assertEqual(self.graph.get(goals).children, children_before)
        self.assertEqual(len(self.graph), 6)

    def test_visible_nodes_skip_collapsed_descendants(self) -> None:
        roadmap = _node_id(self.graph, "Roadmap")
        launch = _node_id(self.graph, "Beta launch")

        self.assertIn(launch, self.view.visible_node_ids())
        self.view.toggle_collapse(roadmap)

        visible = self.view.visible_node_ids()
        self.assertIn(roadmap, visible)
        self.assertNotIn(launch, visible)
        self.assertEqual(visible[0], self.graph.root_id)

    def test_single_select_replaces_selection(self) -> None:
        goals = _node_id(self.graph, "Goals")
        roadmap = _node_id(self.graph, "Roadmap")

        self.view.select(goals)
        self.view.select(roadmap)

        self.assertEqual(self.view.selected_ids, {roadmap})

    def test_multi_select_toggles_membership(self) -> None:
        goals = _node_id(self.graph, "Goals")
        roadmap = _node_id(self.graph, "Roadmap")

        self.view.select(goals, multi_select=True)
        self.view.select(roadmap, multi_select=True)
        self.assertEqual(self.view.selected_ids, {goals, roadmap})

        self.view.select(goals, multi_select=True)
        self.assertEqual(self.view.selected_ids, {roadmap})

        self.view.clear_selection()
        self.assertEqual(self.view.selected_ids, set())

    def test_unknown_ids_are_ignored(self) -> None:
        self.view.toggle_collapse("missing")
        self.view.select("missing")
        self.view.select("missing", multi_select=True)

        self.assertEqual(self.view.collapsed_ids, set())
        self.assertEqual(self.view.selected_ids, set())

    def test_search_is_case_insensitive_substring(self) -> None:
        hits = self.view.search("LAUNCH")

        self.assertEqual(hits, {_node_id(self.graph, "Beta launch")})
        self.assertEqual(self.view.search_hit_ids, hits)

    def test_search_matches_hidden_content(self) -> None:
        graph = build_mind_map(parse_text("# Notes\n## **Critical** path"))
        view = ViewState(graph)

        self.assertEqual(view.search("**critical**"), {_node_id(graph, "Critical path")})

    def test_blank_search_clears_hits(self) -> None:
        self.view.search("goals")
        self.assertTrue(self.view.search_hit_ids)

        self.assertEqual(self.view.search("   "), set())
        self.assertEqual(self.view.search_hit_ids, set())

    def test_search_without_matches_returns_empty(self) -> None:
        self.assertEqual(self.view.search("nothing like this"), set())

    def test_returned_hits_are_a_copy(self) -> None:
        hits = self.view.search("a")
        hits.clear()

        self.assertTrue(self.view.search_hit_ids)

    def test_clear_search(self) -> None:
        self.view.search("plan")
        self.view.clear_search()

        self.assertEqual(self.view.search_hit_ids, set())


if __name__ == "__main__":
    unittest.main()
