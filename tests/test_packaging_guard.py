from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_api_tree_is_not_a_regular_package():
    assert not list((ROOT / "src").rglob("__init__.py"))


def test_distribution_only_ships_samplesplit():
    contents = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    assert 'include = ["samplesplit*"]' in contents
    assert '"src*"' not in contents
