import pytest

from mergegate.readiness.glob import compile_glob, glob_match, glob_to_regex


@pytest.mark.parametrize("pattern", ["main", "release-1.0", "a+b", "v(1)", "x.y"])
def test_literal_patterns(pattern):
    assert glob_match(pattern, pattern)
    assert not glob_match(pattern, pattern + "x")


def test_double_star_crosses_separators():
    assert glob_match("feature/**", "feature/a/b/c")
    assert glob_match("feature/**", "feature/")
    assert not glob_match("feature/**", "other/a")

    assert glob_match("**/hotfix", "team/a/hotfix")
    assert glob_match("**/hotfix", "hotfix")


def test_single_star_stays_in_segment():
    assert glob_match("release/*", "release/1.0")
    assert not glob_match("release/*", "release/1.0/rc")
    assert glob_match("*", "main")
    assert not glob_match("*", "feature/x")


def test_question_mark():
    assert glob_match("releases/v?.?", "releases/v1.0")
    assert not glob_match("releases/v?.?", "releases/v10.0")
    assert not glob_match("a?b", "a/b")


def test_character_classes():
    assert glob_match("[1-9]-[0-9]-stable", "1-0-stable")
    assert not glob_match("[1-9]-[0-9]-stable", "0-0-stable")

    assert glob_match("[!a]ain", "main")
    assert not glob_match("[!a]ain", "aain")
    assert glob_match("[^a]ain", "main")
    assert not glob_match("[^m]ain", "main")


def test_unterminated_class_is_literal():
    assert glob_to_regex("release[") == r"^release\[\Z"
    assert glob_match("release[", "release[")
    assert not glob_match("release[", "release")


def test_invalid_range_falls_back_to_literal():
    assert compile_glob("[z-a]ain") is None
    assert not glob_match("[z-a]ain", "zain")
    assert glob_match("[z-a]ain", "[z-a]ain")


def test_dot_is_not_a_wildcard():
    assert glob_match("v1.0", "v1.0")
    assert not glob_match("v1.0", "v1x0")
