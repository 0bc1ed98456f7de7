# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `src` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import json

from src import recipes
from src.config import Settings


def _catalogue():
    s = Settings()
    return recipes.load_recipes(s.ASSETS_DIR, s.RECIPES_FILE)


def test_bundled_catalogue():
    data = _catalogue()
    assert sorted(data) == [2, 3, 4, 5, 13]
    gyoza = data[2]
    assert gyoza.name == "ぎょうざ"
    assert gyoza.content_type == "image/jpeg"
    assert gyoza.image
    assert len(gyoza.steps) == 6


def test_load_from_other_directory(tmp_path):
    (tmp_path / "pic.png").write_bytes(b"\x89PNG")
    (tmp_path / "cat.json").write_text(json.dumps([
        {"id": 7, "name": "Toast", "description": "Bread, but hot",
         "emoji": "🍞", "image": "pic.png", "content_type": "image/png",
         "steps": ["slice", "toast"]},
    ]), encoding="utf-8")
    data = recipes.load_recipes(tmp_path, "cat.json")
    assert data[7].image == b"\x89PNG"
    assert data[7].content_type == "image/png"
    assert data[7].steps == ["slice", "toast"]


def test_get_recipe_ignores_identity():
    data = _catalogue()
    assert recipes.get_recipe(data, 4).name == "さしみ料理"
    assert recipes.get_recipe(data, 999) is None


def test_recipe_detail_download_flag():
    data = _catalogue()
    assert recipes.recipe_detail(data[13], 13).show_download is True
    assert recipes.recipe_detail(data[2], 13).show_download is False


def test_dashboard_branches_on_exact_identity():
    data = _catalogue()
    mine = recipes.dashboard_for("kanmu", data)
    assert mine.title == "kanmuのダッシュボード"
    assert [r.id for r in mine.recipes] == [2, 3, 5]
    assert "kanmu" in mine.welcome_message

    for user in ("admin", "kanmu ", "", "KANMU"):
        other = recipes.dashboard_for(user, data)
        assert other.title == "レシピダッシュボード"
        assert [r.id for r in other.recipes] == [13]


def test_dashboard_cards_use_summary():
    data = _catalogue()
    card = recipes.dashboard_for("admin", data).recipes[0]
    assert card.description == "お肉を引き立てる特製ソース。隠し味で絶品に！"


def test_sashimi_is_never_listed():
    data = _catalogue()
    for user in ("kanmu", "admin"):
        ids = [r.id for r in recipes.dashboard_for(user, data).recipes]
        assert 4 not in ids


def test_list_recipes_cli(capsys):
    from src import main as main_module

    main_module.main(["--list-recipes"])
    out = capsys.readouterr().out
    assert "Loaded 5 recipe(s)." in out
    assert "- 13: 🥩 ステーキソース" in out
