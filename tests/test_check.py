import textwrap

import pytest

import bijective
import bijective._check as check

SATISFIED_CHECK = """
    elements = [
        { name = "one", number = 1 },
        { name = "two", number = 2 },
    ]

    [[predicates]]
    conditions = [ { key = "number", op = "gt", value = 0 } ]

    [[predicates]]
    description = "number one"
    conditions = [ { key = "number", op = "eq", value = 1 } ]
"""

FAILING_CHECK = """
    name = "failing"
    elements = [
        { name = "one", number = 1 },
        { name = "two", number = 2 },
    ]

    [[predicates]]
    description = "number one"
    conditions = [ { key = "number", op = "eq", value = 1 } ]

    [[predicates]]
    description = "also number one"
    conditions = [ { key = "name", op = "eq", value = "one" } ]
"""


@pytest.fixture
def home(tmp_path, monkeypatch):
    home = tmp_path.resolve() / "home"
    project = home / "project" / "sub"
    project.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(project)
    return home


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content))
    return path


def test_find_check_description_by_path(tmp_path):
    path = tmp_path / "numbers.toml"
    assert check.find_check_description(str(path)) == path


def test_find_check_description_in_parent_directory(home):
    path = write(home / "project" / ".bijective" / "numbers.toml", SATISFIED_CHECK)
    assert check.find_check_description("numbers") == path


def test_find_check_description_in_config_home(home, tmp_path):
    path = write(tmp_path / "config" / "bijective" / "numbers.toml", SATISFIED_CHECK)
    assert check.find_check_description("numbers") == path


def test_find_check_description_not_found(home):
    with pytest.raises(ValueError) as execinfo:
        check.find_check_description("missing")
    assert "No check description file exists for name missing" in str(
        execinfo.value
    )


def test_load_check_uses_file_name(tmp_path):
    path = write(tmp_path / "numbers.toml", SATISFIED_CHECK)

    check_desc = check.load_check(str(path))
    assert check_desc.name == "numbers"
    assert check_desc.predicates[0].description == "number gt 0"


def test_load_check_with_name(tmp_path):
    path = write(tmp_path / "numbers.toml", FAILING_CHECK)
    assert check.load_check(str(path)).name == "failing"


def test_run_check(tmp_path):
    path = write(tmp_path / "numbers.toml", SATISFIED_CHECK)

    solution = check.run_check(check.load_check(str(path)))
    assert solution.is_perfect
    assert solution.matching == {0: 1, 1: 0}


def test_run_failing_check(tmp_path):
    path = write(tmp_path / "numbers.toml", FAILING_CHECK)

    solution = check.run_check(check.load_check(str(path)))
    assert not solution.is_perfect
    assert solution.unmatched_predicates == [1]
    assert solution.unmatched_elements == [1]


def test_assert_check(tmp_path):
    path = write(tmp_path / "numbers.toml", FAILING_CHECK)

    with pytest.raises(bijective.SatisfyError) as execinfo:
        check.assert_check(check.load_check(str(path)))

    message = str(execinfo.value)
    assert message.startswith(
        "Expected collection to satisfy all predicates because check failing "
        "requires it, but:"
    )
    assert "also number one" in message
    assert 'Index: 1, Element: name="two" number=2' in message
