"""Tests for color channel orchestration and the high-level generator."""

import logging

import numpy as np

from models import (
    CoverageStrategy,
    GeneratorConfig,
    LayoutKind,
    ProcessedImage,
)
from string_art import ChannelOrchestrator, PathBuilder, StringArtGenerator
from string_art.layout import build_nail_layout


def test_grayscale_image_gives_empty_bundle(caplog):
    image = ProcessedImage(width=60, height=60, darkness=np.full((60, 60), 0.5))
    with caplog.at_level(logging.ERROR):
        result = ChannelOrchestrator().generate(image, 50)
    assert result.is_empty()
    assert "not loaded in color mode" in caplog.text


def test_missing_channel_gives_empty_bundle(color_image):
    del color_image.channels["Y"]
    assert ChannelOrchestrator().generate(color_image, 50).is_empty()


def test_channels_are_independent_runs(color_image):
    result = ChannelOrchestrator(contrast_factor=0.5).generate(
        color_image, 50, LayoutKind.CIRCULAR, strings_per_color=12
    )
    layout = build_nail_layout(60, 60, 50, LayoutKind.CIRCULAR)

    for letter in "CMYK":
        sequence = result.for_channel(letter)
        assert 1 <= len(sequence) <= 12
        assert sequence[0] == 0
        expected = PathBuilder(
            color_image.channels[letter], layout, 0.5, CoverageStrategy.DEFAULT
        ).build(12)
        assert sequence == expected.sequence

    assert result.total_strings == sum(len(result.for_channel(c)) for c in "CMYK")


def test_worker_count_does_not_change_results(color_image):
    sequential = ChannelOrchestrator(max_workers=1).generate(color_image, 50, strings_per_color=15)
    parallel = ChannelOrchestrator(max_workers=4).generate(color_image, 50, strings_per_color=15)
    assert sequential == parallel


def test_strings_per_color_is_clamped(color_image):
    result = ChannelOrchestrator().generate(color_image, 50, strings_per_color=0)
    for letter in "CMYK":
        assert result.for_channel(letter) == [0]


def test_generator_remaps_strategy():
    assert StringArtGenerator(GeneratorConfig(max_strings=0)).effective_strategy is (
        CoverageStrategy.DEFAULT
    )
    bounded = GeneratorConfig(max_strings=100, coverage_strategy=CoverageStrategy.DEFAULT)
    assert StringArtGenerator(bounded).effective_strategy is CoverageStrategy.ADAPTIVE
    unbounded_boost = GeneratorConfig(
        max_strings=0, coverage_strategy=CoverageStrategy.EXPLORATION_BOOST
    )
    assert StringArtGenerator(unbounded_boost).effective_strategy is CoverageStrategy.DEFAULT


def test_generate_grayscale_uses_remapped_strategy(gradient, caplog):
    image = ProcessedImage(width=80, height=80, darkness=gradient)
    config = GeneratorConfig(num_nails=50, max_strings=40)
    generator = StringArtGenerator(config)

    with caplog.at_level(logging.INFO):
        result = generator.generate_grayscale(image)
    assert "adaptive" in caplog.text

    layout = generator.layout_for(image)
    expected = PathBuilder(gradient, layout, 0.5, CoverageStrategy.ADAPTIVE).build(40)
    assert result.sequence == expected.sequence
    assert len(result.sequence) <= 40


def test_generate_color_uses_config(color_image):
    config = GeneratorConfig(
        num_nails=50, layout=LayoutKind.RECTANGULAR, color_mode=True, strings_per_color=8
    )
    result = StringArtGenerator(config).generate_color(color_image)
    layout = build_nail_layout(60, 60, 50, LayoutKind.RECTANGULAR)
    for letter in "CMYK":
        sequence = result.for_channel(letter)
        assert len(sequence) <= 8
        assert all(0 <= nail < len(layout) for nail in sequence)
