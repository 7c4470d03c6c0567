"""Unit tests for word sequence alignment."""

import pytest

from prosediff.align import AlignmentRun, align, edit_script


def lcs_length(a, b):
    """Return the length of the longest common subsequence of ``a`` and ``b``."""
    previous = [0] * (len(b) + 1)
    for x in a:
        current = [0]
        for j, y in enumerate(b):
            current.append(previous[j] + 1 if x == y else max(previous[j + 1], current[j]))
        previous = current
    return previous[-1]


@pytest.mark.unit
class TestEditScript:
    """Test edit_script()."""

    def test_single_substitution(self):
        """Test that a changed word is a deletion followed by an insertion."""
        assert edit_script(["foo", "bar"], ["foo", "baz"]) == ["equal", "delete", "insert"]

    def test_empty_sequences(self):
        """Test edit scripts involving empty sequences."""
        assert edit_script([], []) == []
        assert edit_script([], ["a", "b"]) == ["insert", "insert"]
        assert edit_script(["a"], []) == ["delete"]

    def test_identical_sequences(self):
        """Test that identical sequences are all equal."""
        assert edit_script(["a", "b", "c"], ["a", "b", "c"]) == ["equal"] * 3

    @pytest.mark.parametrize(
        "a,b",
        [
            ("abcabba", "cbabac"),
            ("the quick brown fox", "a quick brown dog"),
            ("xxxx", "yyyy"),
            ("abc", "cba"),
            ("a b a b a", "b a b a b"),
        ],
    )
    def test_script_is_shortest(self, a, b):
        """Test that the number of equal words is the LCS length."""
        words_a, words_b = a.split() if " " in a else list(a), b.split() if " " in b else list(b)
        script = edit_script(words_a, words_b)
        assert script.count("equal") == lcs_length(words_a, words_b)
        assert script.count("equal") + script.count("delete") == len(words_a)
        assert script.count("equal") + script.count("insert") == len(words_b)


@pytest.mark.unit
class TestAlign:
    """Test align()."""

    def test_changed_word(self):
        """Test a same run followed by a changed run."""
        assert align(["foo", "bar"], ["foo", "baz"]) == [
            AlignmentRun(same=True, a_start=0, b_start=0, a_words=("foo",), b_words=("foo",)),
            AlignmentRun(same=False, a_start=1, b_start=1, a_words=("bar",), b_words=("baz",)),
        ]

    def test_empty(self):
        """Test that two empty sequences give no runs."""
        assert align([], []) == []

    def test_pure_insertion(self):
        """Test a changed run with no words on the first side."""
        assert align([], ["a"]) == [AlignmentRun(same=False, a_start=0, b_start=0, a_words=(), b_words=("a",))]

    def test_deletion_in_the_middle(self):
        """Test that a deletion splits two same runs."""
        runs = align(["a", "b", "c"], ["a", "c"])
        assert [run.same for run in runs] == [True, False, True]
        assert runs[1].a_words == ("b",)
        assert runs[1].b_words == ()
        assert runs[2].a_start == 2
        assert runs[2].b_start == 1

    def test_identical(self):
        """Test that identical sequences form a single same run."""
        assert align(["x", "y"], ["x", "y"]) == [
            AlignmentRun(same=True, a_start=0, b_start=0, a_words=("x", "y"), b_words=("x", "y"))
        ]

    def test_runs_cover_both_sequences(self):
        """Test that runs are contiguous and cover both sequences."""
        words_a = "the cat sat on the mat".split()
        words_b = "a cat sat upon the red mat".split()
        runs = align(words_a, words_b)

        assert [word for run in runs for word in run.a_words] == words_a
        assert [word for run in runs for word in run.b_words] == words_b
        for previous, run in zip(runs, runs[1:]):
            assert previous.a_end == run.a_start
            assert previous.b_end == run.b_start
            assert previous.same != run.same

    def test_same_runs_match(self):
        """Test that same runs have identical words on both sides."""
        for run in align("a b c d e".split(), "a x c y e".split()):
            if run.same:
                assert run.a_words == run.b_words
            else:
                assert run.a_words or run.b_words

    def test_run_end_properties(self):
        """Test a_end and b_end."""
        run = AlignmentRun(same=False, a_start=2, b_start=3, a_words=("x",), b_words=("y", "z"))
        assert run.a_end == 3
        assert run.b_end == 5
