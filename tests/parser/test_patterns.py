"""Tests for the shared classification predicates."""

import pytest

from scriptflow.models import FormatTag
from scriptflow.parser import patterns


class TestSceneHeading:
    """Scene heading detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "INT. PARK - DAY",
            "EXT. STREET - NIGHT",
            "INT./EXT. CAR - MOVING",
            "I/E. HALLWAY",
            "int. kitchen - morning",
            "  INT. OFFICE  ",
            ".SNIPER SCOPE POV",
        ],
    )
    def test_recognizes_headings(self, line):
        assert patterns.is_scene_heading(line)

    @pytest.mark.parametrize(
        "line",
        ["INTERIOR DESIGN", "FADE IN:", "JOHN", "...and then", "Internal memo."],
    )
    def test_rejects_non_headings(self, line):
        assert not patterns.is_scene_heading(line)

    @pytest.mark.parametrize(
        "line", ["SCENE 3: THE PARK", "ACT 2.", "CHAPTER 1 - BEGINNINGS", "EST PARK"]
    )
    def test_lenient_prefixes(self, line):
        assert patterns.is_lenient_heading(line)
        assert not patterns.is_scene_heading(line)

    def test_lenient_does_not_accept_transition(self):
        assert not patterns.is_lenient_heading("FADE IN:")


class TestTransition:
    """Transition and camera vocabulary."""

    @pytest.mark.parametrize(
        "line", ["CUT TO:", "FADE IN:", "FADE OUT.", "DISSOLVE TO:", "SMASH CUT TO:"]
    )
    def test_transitions(self, line):
        assert patterns.is_transition(line)

    def test_mixed_case_is_not_transition(self):
        assert not patterns.is_transition("Cut to the chase.")

    def test_direction_vocabulary(self):
        assert patterns.has_direction_vocabulary("ANGLE ON the door")
        assert patterns.has_direction_vocabulary("The car pulls away, CAMERA")
        assert patterns.has_direction_vocabulary("MOMENTS LATER")
        assert not patterns.has_direction_vocabulary("She smiles.")


class TestSpeaker:
    """Speaker detection with context."""

    def test_name_between_blank_and_dialog(self):
        assert patterns.is_speaker("JOHN", "", "Hello there.")

    def test_name_at_document_start(self):
        assert patterns.is_speaker("JOHN", None, "Hello.")

    def test_extension_allowed(self):
        assert patterns.is_speaker("SARAH (V.O.)", "", "Where are you?")
        assert patterns.is_speaker("JOHN (CONT'D)", "", "Anyway.")

    def test_followed_by_parenthetical(self):
        assert patterns.is_speaker("MARY", "", "(whispering)")

    def test_followed_by_blank(self):
        assert patterns.is_speaker("MARY", "", "")

    def test_requires_blank_before(self):
        assert not patterns.is_speaker("JOHN", "Some action.", "Hello.")

    def test_rejects_lowercase(self):
        assert not patterns.is_speaker("John", "", "Hello.")

    def test_rejects_headings_and_transitions(self):
        assert not patterns.is_speaker("INT. PARK - DAY", "", "Trees.")
        assert not patterns.is_speaker("CUT TO:", "", "")

    def test_rejects_long_lines(self):
        assert not patterns.is_speaker("A" * 40, "", "Hello.")

    def test_rejects_number_following(self):
        assert not patterns.is_speaker("JOHN", "", "42 is the answer")

    def test_lenient_accepts_marker(self):
        assert patterns.is_lenient_speaker("@JOHN", "", "Hello.")
        assert not patterns.is_speaker("@JOHN", "", "Hello.")

    def test_looks_like_speaker_ignores_context(self):
        assert patterns.looks_like_speaker("JOHN")
        assert not patterns.looks_like_speaker(None)
        assert not patterns.looks_like_speaker("")


class TestParentheticalAndDialog:
    """Parentheticals, dialog and dialog continuation."""

    @pytest.mark.parametrize("line", ["(beat)", "( quietly )", "(looks at (him))"])
    def test_parentheticals(self, line):
        assert patterns.is_parenthetical(line)

    @pytest.mark.parametrize("line", ["(beat", "beat)", "(a) and (b", "()x", "("])
    def test_not_parentheticals(self, line):
        assert not patterns.is_parenthetical(line)

    def test_dialog_under_speaker(self):
        assert patterns.is_dialog("Hello there.", "JOHN")

    def test_dialog_under_parenthetical(self):
        assert patterns.is_dialog("hello.", "(whispering)")

    def test_dialog_needs_speaker_context(self):
        assert not patterns.is_dialog("Hello there.", "")
        assert not patterns.is_dialog("Hello there.", "She waves.")
        assert not patterns.is_dialog("...what?", "JOHN")

    def test_continuation_is_lowercase_after_dialog_context(self):
        assert patterns.is_dialog_continuation("and then it rained.", FormatTag.DIALOG)
        assert patterns.is_dialog_continuation("and then", FormatTag.SPEAKER)
        assert patterns.is_dialog_continuation("and then", FormatTag.DIRECTIONS)

    def test_continuation_rejected_elsewhere(self):
        assert not patterns.is_dialog_continuation("And then.", FormatTag.DIALOG)
        assert not patterns.is_dialog_continuation("and then", FormatTag.ACTION)
        assert not patterns.is_dialog_continuation("and then", None)


class TestDirection:
    """Generic action text."""

    def test_capitalized_prose(self):
        assert patterns.is_direction("She crosses the room.", "", "")

    def test_vocabulary_counts(self):
        assert patterns.is_direction("CUT TO:", "", "")

    def test_structural_lines_are_not_directions(self):
        assert not patterns.is_direction("INT. PARK - DAY")
        assert not patterns.is_direction("(beat)")
        assert not patterns.is_direction("JOHN", "", "Hi.")

    def test_all_caps_without_vocabulary(self):
        assert not patterns.is_direction("BOOM", "Text.", "")


class TestArtifacts:
    """Separators, page numbers and wrap helpers."""

    @pytest.mark.parametrize("line", ["---", "***", "___", "= = ="])
    def test_noise(self, line):
        assert patterns.is_noise(line)

    def test_text_is_not_noise(self):
        assert not patterns.is_noise("-- hello")
        assert not patterns.is_noise("")

    @pytest.mark.parametrize("line", ["12.", "3", "(CONTINUED)", "CONTINUED:", "(CONT'D)"])
    def test_page_artifacts(self, line):
        assert patterns.is_page_artifact(line)

    def test_ends_sentence(self):
        assert patterns.ends_sentence("Done.")
        assert patterns.ends_sentence("What?  ")
        assert not patterns.ends_sentence("and then")

    def test_starts_new_block(self):
        assert patterns.starts_new_block("INT. PARK")
        assert patterns.starts_new_block("JOHN")
        assert patterns.starts_new_block("(beat)")
        assert not patterns.starts_new_block("walks away")
