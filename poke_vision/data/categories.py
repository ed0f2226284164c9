"""Curated category membership (legendary, mythical, baby) by national dex id."""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

from ..models import Category, PokemonSummary

POKEMON_URL_TEMPLATE = "https://pokeapi.co/api/v2/pokemon/{id}/"

CATEGORY_MEMBERS: Dict[Category, Tuple[Tuple[int, str], ...]] = {
    Category.LEGENDARY: (
        (144, "articuno"),
        (145, "zapdos"),
        (146, "moltres"),
        (150, "mewtwo"),
        (243, "raikou"),
        (244, "entei"),
        (245, "suicune"),
        (249, "lugia"),
        (250, "ho-oh"),
        (377, "regirock"),
        (378, "regice"),
        (379, "registeel"),
        (380, "latias"),
        (381, "latios"),
        (382, "kyogre"),
        (383, "groudon"),
        (384, "rayquaza"),
        (480, "uxie"),
        (481, "mesprit"),
        (482, "azelf"),
        (483, "dialga"),
        (484, "palkia"),
        (485, "heatran"),
        (486, "regigigas"),
        (487, "giratina-altered"),
        (488, "cresselia"),
        (638, "cobalion"),
        (639, "terrakion"),
        (640, "virizion"),
        (641, "tornadus-incarnate"),
        (642, "thundurus-incarnate"),
        (643, "reshiram"),
        (644, "zekrom"),
        (645, "landorus-incarnate"),
        (646, "kyurem"),
        (716, "xerneas"),
        (717, "yveltal"),
        (718, "zygarde-50"),
    ),
    Category.MYTHICAL: (
        (151, "mew"),
        (251, "celebi"),
        (385, "jirachi"),
        (386, "deoxys-normal"),
        (489, "phione"),
        (490, "manaphy"),
        (491, "darkrai"),
        (492, "shaymin-land"),
        (493, "arceus"),
        (494, "victini"),
        (647, "keldeo-ordinary"),
        (648, "meloetta-aria"),
        (649, "genesect"),
        (719, "diancie"),
        (720, "hoopa"),
        (721, "volcanion"),
    ),
    Category.BABY: (
        (172, "pichu"),
        (173, "cleffa"),
        (174, "igglybuff"),
        (175, "togepi"),
        (236, "tyrogue"),
        (238, "smoochum"),
        (239, "elekid"),
        (240, "magby"),
        (298, "azurill"),
        (360, "wynaut"),
        (406, "budew"),
        (433, "chingling"),
        (438, "bonsly"),
        (439, "mime-jr"),
        (440, "happiny"),
        (446, "munchlax"),
        (447, "riolu"),
        (458, "mantyke"),
        (848, "toxel"),
    ),
}


class CategoryCatalog:
    """Serves the complete member list of a named category."""

    def __init__(self, members: Dict[Category, Tuple[Tuple[int, str], ...]] | None = None) -> None:
        self._members = members if members is not None else CATEGORY_MEMBERS

    def members(self, category: Union[str, Category]) -> List[PokemonSummary]:
        """Return the roster for ``category``; raises ``ValueError`` for unknown names."""

        key = category if isinstance(category, Category) else Category(str(category).strip().lower())
        return [
            PokemonSummary(name=name, url=POKEMON_URL_TEMPLATE.format(id=pokemon_id))
            for pokemon_id, name in self._members.get(key, ())
        ]
