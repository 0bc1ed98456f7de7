import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from .schemas import DashboardData, DashboardRecipe, Recipe, RecipeDetail

logger = logging.getLogger(__name__)

# recipe ids listed on each dashboard, in display order
PRIVILEGED_RECIPE_IDS = (2, 3, 5)
GENERIC_RECIPE_IDS = (13,)


def load_recipes(assets_dir, filename="recipes.json") -> Dict[int, Recipe]:
    """Load the recipe catalogue and the image of every entry.

    Args:
        assets_dir (str or Path): directory holding the catalogue and images.
        filename (str): catalogue file name inside ``assets_dir``.

    Returns:
        dict: recipe id -> Recipe.
    """
    base = Path(assets_dir)
    with (base / filename).open("r", encoding="utf-8") as f:
        entries = json.load(f)

    recipes = {}
    for entry in entries:
        image_name = entry.pop("image", None)
        image = (base / image_name).read_bytes() if image_name else b""
        recipe = Recipe(image=image, **entry)
        recipes[recipe.id] = recipe
    logger.info("loaded %d recipe(s) from %s", len(recipes), base / filename)
    return recipes


def get_recipe(recipes: Mapping[int, Recipe], recipe_id: int) -> Optional[Recipe]:
    # no ownership check: every recipe is visible to every identity
    return recipes.get(recipe_id)


def recipe_detail(recipe: Recipe, download_recipe_id: int) -> RecipeDetail:
    return RecipeDetail(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        emoji=recipe.emoji,
        steps=list(recipe.steps),
        show_download=recipe.id == download_recipe_id,
    )


def _cards(recipes: Mapping[int, Recipe], ids):
    cards = []
    for rid in ids:
        r = recipes.get(rid)
        if r is None:
            continue
        cards.append(DashboardRecipe(
            id=r.id,
            name=r.name,
            description=r.summary or r.description,
            emoji=r.emoji,
        ))
    return cards


def dashboard_for(
    user: str, recipes: Mapping[int, Recipe], privileged_user: str = "kanmu"
) -> DashboardData:
    """Build the dashboard for ``user``.

    The only branch is an exact comparison with ``privileged_user``; every
    other identity, including unknown ones, gets the generic listing.
    """
    if user == privileged_user:
        return DashboardData(
            title=f"{privileged_user}のダッシュボード",
            welcome_message=f"🎉 こんにちは、{user}さん！あなたの美味しいレシピコレクションをお楽しみください。",
            recipes=_cards(recipes, PRIVILEGED_RECIPE_IDS),
        )
    return DashboardData(
        title="レシピダッシュボード",
        welcome_message=f"✨ こんにちは、{user}さん！利用可能なレシピをご覧ください。",
        recipes=_cards(recipes, GENERIC_RECIPE_IDS),
    )
