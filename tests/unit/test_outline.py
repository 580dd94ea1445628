"""Tests for scene outline extraction."""

import pytest

from screenlex.outline import Scene, SceneScanner, extract_scenes, scan_scenes
from screenlex.tokenizer.incremental import IncrementalTokenizer
from screenlex.tree import syntax_tree

EXAMPLE = "INT. HOUSE - DAY\nJohn enters.\n\nEXT. STREET - NIGHT\n"


class TestExtractScenes:
    """Collecting scene headings from a tree."""

    def test_scene_example(self):
        tree = syntax_tree(IncrementalTokenizer(EXAMPLE))
        assert extract_scenes(tree) == [
            Scene("INT. HOUSE - DAY", 0),
            Scene("EXT. STREET - NIGHT", 31),
        ]

    @pytest.mark.parametrize("text", ["", "\n\n", "Just some action.", "JOHN\nHi."])
    def test_no_scenes(self, text):
        assert extract_scenes(syntax_tree(IncrementalTokenizer(text))) == []

    def test_scene_inside_boneyard_is_ignored(self):
        text = "/*\nINT. CUT SCENE\n*/\nINT. KEPT SCENE"
        scenes = extract_scenes(syntax_tree(IncrementalTokenizer(text)))
        assert scenes == [Scene("INT. KEPT SCENE", text.index("INT. KEPT"))]

    def test_sample_script(self, sample_script):
        scenes = extract_scenes(syntax_tree(IncrementalTokenizer(sample_script)))
        assert [scene.name for scene in scenes] == [
            "INT. COFFEE SHOP - DAY",
            "EXT. STREET - NIGHT",
        ]
        assert scenes[1].pos == sample_script.index("EXT. STREET")

    def test_to_dict(self):
        assert Scene("INT. A", 4).to_dict() == {"name": "INT. A", "pos": 4}


class TestScanScenes:
    """Bounded parse with full-parse fallback."""

    def test_falls_back_to_full_parse(self):
        tokenizer = IncrementalTokenizer(EXAMPLE)
        scenes = scan_scenes(tokenizer, budget=1)
        assert [scene.pos for scene in scenes] == [0, 31]
        assert tokenizer.is_complete()

    def test_bounded_parse_is_enough(self):
        assert len(scan_scenes(IncrementalTokenizer(EXAMPLE), budget=100)) == 2


class TestSceneScanner:
    """Keeping the outline in step with edits."""

    def test_initial_scan(self):
        scanner = SceneScanner(EXAMPLE)
        assert [scene.name for scene in scanner.scenes] == [
            "INT. HOUSE - DAY",
            "EXT. STREET - NIGHT",
        ]

    def test_update_recomputes_scenes(self):
        scanner = SceneScanner(EXAMPLE)
        scenes = scanner.update("EXT. STREET - NIGHT\n")
        assert scenes == [Scene("EXT. STREET - NIGHT", 0)]
        assert scanner.scenes == scenes

    def test_apply_change_shifts_positions(self):
        scanner = SceneScanner(EXAMPLE)
        scanner.apply_change(0, 0, "FADE IN:\n\n")
        assert [scene.pos for scene in scanner.scenes] == [10, 41]

    def test_on_change_only_when_outline_changes(self):
        calls = []
        scanner = SceneScanner("", on_change=calls.append)
        assert calls == []

        scanner.update("INT. A")
        assert calls == [[Scene("INT. A", 0)]]

        scanner.update("INT. A\nSomething happens.")
        assert len(calls) == 1

        scanner.update("Something happens.")
        assert calls[-1] == []

    def test_small_budget_still_sees_whole_document(self):
        scanner = SceneScanner(budget=1)
        scanner.update(EXAMPLE)
        assert len(scanner.scenes) == 2
