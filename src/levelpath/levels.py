"""
Built-in level maps.

MOVIE_MAP is a long campaign mixing every row pattern; LETTER_MAP is a
compact map with a run of single rows between two fan rows.
"""

from .models import LevelGraph, NodeSpec

_MOVIE_CHAPTER = (
    (NodeSpec("Inception", "movie", unlocked=True),),
    (NodeSpec("Interstellar", "public"), NodeSpec("Tenet", "access_time")),
    (NodeSpec("The Dark Knight", "shield_moon"),),
    (NodeSpec("The Prestige", "auto_awesome"),),
    (NodeSpec("Dunkirk", "flight_takeoff", unlocked=True),),
    (NodeSpec("E", "forest"), NodeSpec("F", "filter_drama")),
)

MOVIE_MAP = LevelGraph(_MOVIE_CHAPTER + _MOVIE_CHAPTER)

LETTER_MAP = LevelGraph(
    (
        (NodeSpec("D"),),
        (NodeSpec("E"), NodeSpec("F")),
        (NodeSpec("s"),),
        (NodeSpec("a"),),
        (NodeSpec("p"),),
        (NodeSpec("t"),),
        (NodeSpec("a"),),
        (NodeSpec("a"), NodeSpec("huju")),
    )
)

# The D -> F fan-out of LETTER_MAP uses a wider lane.
LETTER_MAP_LANE_OVERRIDES = {0: 130.0}

BUILTIN_MAPS = {
    "movies": MOVIE_MAP,
    "letters": LETTER_MAP,
}
