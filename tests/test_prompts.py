"""Tests for system prompt construction and source detection."""

from types import SimpleNamespace

import pytest

from src.chat.prompts import (
    AUTO_ROUTE,
    DISABLED,
    INSTITUTION_DATA,
    RESEARCH_LIBRARY,
    USER_CONTROLLED,
    PromptOptions,
    build_system_prompt,
    detect_sources,
    format_institution_block,
    max_tokens_for,
)

SETTINGS = SimpleNamespace(MAX_TOKENS_WITH_RESEARCH=2000, MAX_TOKENS_WITHOUT_RESEARCH=1000)


class TestPromptOptions:
    def test_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            PromptOptions(mode="always")

    def test_uses_research(self):
        assert not PromptOptions(mode=DISABLED, include_research=True).uses_research
        assert not PromptOptions(mode=USER_CONTROLLED, include_research=False).uses_research
        assert PromptOptions(mode=USER_CONTROLLED, include_research=True).uses_research
        assert PromptOptions(mode=AUTO_ROUTE).uses_research


class TestBuildSystemPrompt:
    def test_data_only_prompt(self, dataset):
        prompt = build_system_prompt(dataset, PromptOptions(mode=USER_CONTROLLED))
        assert "=== GROUND TRUTH DATA STATISTICS ===" in prompt
        assert "R1 Institutions: 9" in prompt
        assert "only have data for these 24 institutions" in prompt
        assert "SOURCE 2" not in prompt

    def test_every_institution_included(self, dataset):
        prompt = build_system_prompt(dataset, PromptOptions(mode=DISABLED))
        for inst in dataset:
            assert f"- {inst.name} ({inst.short_name})" in prompt

    def test_research_prompt_names_library(self, dataset):
        options = PromptOptions(mode=USER_CONTROLLED, include_research=True, research_library="Writing Sites")
        prompt = build_system_prompt(dataset, options)
        assert "SOURCE 2 - RESEARCH LIBRARY" in prompt
        assert '"Writing Sites"' in prompt

    def test_auto_route_prompt(self, dataset):
        prompt = build_system_prompt(dataset, PromptOptions(mode=AUTO_ROUTE))
        assert "QUANTITATIVE questions" in prompt
        assert "QUALITATIVE questions" in prompt

    def test_disabled_ignores_include_research(self, dataset):
        prompt = build_system_prompt(dataset, PromptOptions(mode=DISABLED, include_research=True))
        assert "SOURCE 2" not in prompt

    def test_program_descriptions(self, make_institution):
        inst = make_institution("abc", program_description="Fellows in every department.")
        prompt = build_system_prompt([inst], PromptOptions())
        assert "ABC: Fellows in every department." in prompt


class TestInstitutionBlock:
    def test_formatted_values(self, make_institution):
        block = format_institution_block(
            make_institution(city="Davis", state="CA", total_enrollment=40848, wac_budget=None, has_writing_center=True)
        )
        assert "  * Location: Davis, CA" in block
        assert "  * Total Enrollment: 40,848" in block
        assert "  * WAC Budget: N/A" in block
        assert "  * Writing Center: Yes" in block


class TestMaxTokens:
    def test_with_research(self):
        assert max_tokens_for(PromptOptions(include_research=True), SETTINGS) == 2000

    def test_without_research(self):
        assert max_tokens_for(PromptOptions(include_research=False), SETTINGS) == 1000
        assert max_tokens_for(PromptOptions(mode=DISABLED, include_research=True), SETTINGS) == 1000


class TestDetectSources:
    def test_data_always_present(self):
        assert detect_sources("MIT has 25 staff.", PromptOptions()) == [INSTITUTION_DATA]

    def test_research_reference(self):
        text = "According to research on WAC pedagogy, fellows programs help."
        assert detect_sources(text, PromptOptions()) == [INSTITUTION_DATA, RESEARCH_LIBRARY]

    def test_library_name(self):
        text = "The writing sites collection suggests..."
        assert RESEARCH_LIBRARY in detect_sources(text, PromptOptions(research_library="Writing Sites"))

    def test_disabled_never_tags_research(self):
        text = "According to research from your notebook..."
        assert detect_sources(text, PromptOptions(mode=DISABLED)) == [INSTITUTION_DATA]
