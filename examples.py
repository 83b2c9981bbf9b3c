#!/usr/bin/env python3
"""
Examples of using the level map generator.

Run this file to generate example level maps as PNG and SVG files.
"""

from levelpath import (
    LETTER_MAP,
    LETTER_MAP_LANE_OVERRIDES,
    MOVIE_MAP,
    LevelMapGenerator,
)


def example_movie_campaign():
    """Long campaign mixing every row pattern"""
    print("Example 1: Movie Campaign")

    generator = LevelMapGenerator()
    generator.save_png(MOVIE_MAP, "example_movies.png", viewport_width=360, scale=2)
    generator.save_svg(MOVIE_MAP, "example_movies.svg", viewport_width=360)
    print("  Saved: example_movies.png, example_movies.svg\n")


def example_letters_with_wide_lane():
    """Compact map whose first fan-out uses a wider lane"""
    print("Example 2: Letters With Lane Override")

    generator = LevelMapGenerator(lane_overrides=LETTER_MAP_LANE_OVERRIDES)
    generator.save_png(LETTER_MAP, "example_letters.png", viewport_width=360, scale=2)
    print("  Saved: example_letters.png\n")


def example_steps():
    """Same campaign routed as alternating steps"""
    print("Example 3: Steps Routing")

    generator = LevelMapGenerator(routing="steps")
    generator.save_png(MOVIE_MAP, "example_steps.png", viewport_width=360, scale=2)
    print("  Saved: example_steps.png\n")


def example_from_text():
    """Map described in the text format, with a debug trace"""
    print("Example 4: Text Input")

    input_text = """
    # World one
    Meadow (park) *
    Cave (landscape) | River (waves)
    Castle (castle)
    Summit (rocket_launch)
    """

    generator = LevelMapGenerator()
    level_map = generator.generate(input_text, viewport_width=360, debug=True)
    print(generator.get_trace().summary())
    generator.exporter.save_png(level_map, "example_text.png")
    print("  Saved: example_text.png\n")


def main():
    """Run all examples."""
    print("=" * 50)
    print("Level Map Examples")
    print("=" * 50)
    print()

    example_movie_campaign()
    example_letters_with_wide_lane()
    example_steps()
    example_from_text()

    print("=" * 50)
    print("All examples generated!")
    print("=" * 50)


if __name__ == "__main__":
    main()
