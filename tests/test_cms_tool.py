"""
Pytest tests for the CMS pages command-line tool.
"""

from __future__ import annotations

from space_dashboard.tools.cms_pages import main


def test_upsert_list_delete(db, capsys, tmp_path):
    assert main(["upsert", "welcome", "Welcome", "--body", "<p>hi</p>"]) == 0
    assert "created: welcome" in capsys.readouterr().out

    body_file = tmp_path / "about.html"
    body_file.write_text("<h3>About</h3>", encoding="utf-8")
    assert main(["upsert", "/about/", "About", "--body-file", str(body_file)]) == 0
    assert "created: about" in capsys.readouterr().out
    assert db.get_page("about")["body"] == "<h3>About</h3>"

    assert main(["upsert", "welcome", "Welcome 2"]) == 0
    assert "updated: welcome" in capsys.readouterr().out

    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "about\tAbout" in out
    assert "welcome\tWelcome 2" in out

    assert main(["delete", "welcome"]) == 0
    assert main(["delete", "welcome"]) == 1
    assert "not found: welcome" in capsys.readouterr().err


def test_upsert_rejects_empty_slug(db, capsys):
    assert main(["upsert", "/", "Empty"]) == 1
    assert "non-empty" in capsys.readouterr().err


def test_delete_normalizes_slug_like_upsert(db, capsys):
    assert main(["upsert", "/welcome/", "Welcome"]) == 0
    assert main(["delete", " /welcome/ "]) == 0
    assert "deleted: welcome" in capsys.readouterr().out
    assert db.get_page("welcome") is None
