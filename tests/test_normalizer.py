"""
Tests for the Canonical Label Normalizer

Covers exact-match priority, ordered substring rules, negation guards and the
sentinel fallback for both vocabularies.
"""

import pytest

from medlit.classification.normalizer import (
    FRAMEWORK_LABEL_RULES,
    STUDY_TYPE_LABEL_RULES,
    normalize_framework,
    normalize_study_type,
)
from medlit.classification.rules import LabelRule, MatchMode, evaluate_rules, is_negated
from medlit.core.enums import ReportingFramework, StudyType


class TestNormalizeStudyType:
    """Tests for normalize_study_type."""

    @pytest.mark.parametrize("study_type", list(StudyType))
    def test_canonical_values_map_to_themselves(self, study_type):
        """Every canonical value is returned unchanged."""
        assert normalize_study_type(study_type.value) is study_type

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Randomized Controlled Trial", StudyType.RCT),
            ("randomised, double-blind trial", StudyType.RCT),
            ("rct", StudyType.RCT),
            ("Prospective cohort study", StudyType.COHORT),
            ("Retrospective chart review", StudyType.COHORT),
            ("Case-Control", StudyType.CASE_CONTROL),
            ("cross sectional survey", StudyType.CROSS_SECTIONAL),
            ("Diagnostic test accuracy study", StudyType.DIAGNOSTIC_ACCURACY),
            ("Case series", StudyType.CASE_SERIES),
            ("case study", StudyType.CASE_REPORT),
            ("Focus group study", StudyType.QUALITATIVE),
            ("In vitro experiment", StudyType.BASIC_SCIENCE),
            ("Phase II clinical trial", StudyType.RCT),
            ("Systematic Review", StudyType.SYSTEMATIC_REVIEW),
            ("Meta-analysis", StudyType.META_ANALYSIS),
        ],
    )
    def test_free_text_labels(self, label, expected):
        assert normalize_study_type(label) is expected

    def test_review_and_meta_analysis_resolves_to_meta_analysis(self):
        """Combined label: the pooled analysis is the more specific design."""
        assert normalize_study_type("Systematic review and meta-analysis") is StudyType.META_ANALYSIS

    def test_systematic_review_of_trials_beats_trial_wording(self):
        assert (
            normalize_study_type("Systematic review of randomized controlled trials")
            is StudyType.SYSTEMATIC_REVIEW
        )

    @pytest.mark.parametrize(
        "label",
        [
            "Randomized controlled trial (see prior meta-analysis of statins)",
            "Randomised trial informed by a systematic literature review",
        ],
    )
    def test_primary_design_beats_secondary_wording(self, label):
        assert normalize_study_type(label) is StudyType.RCT

    def test_meta_analyses_label(self):
        assert normalize_study_type("Meta-analyses of published data") is StudyType.META_ANALYSIS

    def test_primary_design_beats_bare_review_mention(self):
        """A cohort label that mentions a review is still a cohort."""
        assert normalize_study_type("cohort study (see systematic review)") is StudyType.COHORT

    def test_abbreviation_is_not_matched_inside_words(self):
        """'infarct' contains 'rct' but names no design."""
        assert normalize_study_type("myocardial infarct registry") is StudyType.OTHER

    def test_non_randomized_is_not_rct(self):
        assert normalize_study_type("non-randomized comparison") is not StudyType.RCT

    @pytest.mark.parametrize(
        "label", ["Non-randomized controlled trial", "non-randomised clinical trial"]
    )
    def test_non_randomized_trial_is_not_rct(self, label):
        assert normalize_study_type(label) is StudyType.OTHER

    def test_randomized_controlled_trial_still_rct(self):
        assert normalize_study_type("randomized controlled trial") is StudyType.RCT

    @pytest.mark.parametrize("raw", [None, "", "   ", 42, 3.5, True, ["RCT"], {"type": "RCT"}])
    def test_unusable_input_returns_sentinel(self, raw):
        assert normalize_study_type(raw) is StudyType.OTHER

    def test_unknown_label_returns_sentinel(self):
        assert normalize_study_type("editorial commentary") is StudyType.OTHER

    def test_negated_secondary_label_is_rejected(self):
        """Rationale that negates the label vetoes it."""
        result = normalize_study_type(
            "Systematic Review",
            negation_context="This is not a systematic review; it cites several.",
        )
        assert result is StudyType.OTHER

    def test_unrelated_context_does_not_veto(self):
        result = normalize_study_type(
            "Systematic Review",
            negation_context="Databases were searched from inception to 2023.",
        )
        assert result is StudyType.SYSTEMATIC_REVIEW

    def test_canonical_value_ignores_negation_context(self):
        """Exact canonical values short-circuit before any rule runs."""
        result = normalize_study_type(
            "SystematicReview", negation_context="not a systematic review"
        )
        assert result is StudyType.SYSTEMATIC_REVIEW


class TestNormalizeFramework:
    """Tests for normalize_framework."""

    @pytest.mark.parametrize("framework", list(ReportingFramework))
    def test_canonical_values_map_to_themselves(self, framework):
        assert normalize_framework(framework.value) is framework

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("CONSORT 2010", ReportingFramework.CONSORT),
            ("strobe checklist", ReportingFramework.STROBE),
            ("PRISMA 2020", ReportingFramework.PRISMA),
            ("MOOSE", ReportingFramework.PRISMA),
            ("STARD 2015", ReportingFramework.STARD),
            ("QUADAS-2", ReportingFramework.STARD),
            ("COREQ", ReportingFramework.COREQ),
            ("care", ReportingFramework.CARE),
            ("CARE guideline", ReportingFramework.CARE),
            ("PICO", ReportingFramework.PICO),
        ],
    )
    def test_free_text_labels(self, label, expected):
        assert normalize_framework(label) is expected

    def test_care_is_not_matched_inside_other_words(self):
        """'standard of care' must not become CARE."""
        assert normalize_framework("standard of care") is ReportingFramework.NONE

    @pytest.mark.parametrize("raw", [None, "", 0, False, ["CONSORT"]])
    def test_unusable_input_returns_sentinel(self, raw):
        assert normalize_framework(raw) is ReportingFramework.NONE


class TestRuleTables:
    """Structural checks on the rule tables."""

    def test_phrases_are_lowercase(self):
        for rule in (*STUDY_TYPE_LABEL_RULES, *FRAMEWORK_LABEL_RULES):
            assert all(p == p.lower() for p in rule.phrases), rule.name

    def test_rule_names_are_unique(self):
        names = [rule.name for rule in STUDY_TYPE_LABEL_RULES]
        assert len(names) == len(set(names))

    def test_uppercase_phrase_is_rejected(self):
        with pytest.raises(ValueError):
            LabelRule("bad", StudyType.RCT, ("RCT",))

    def test_empty_rule_is_rejected(self):
        with pytest.raises(ValueError):
            LabelRule("empty", StudyType.RCT, ())

    def test_first_match_wins(self):
        rules = (
            LabelRule("specific", "a", ("randomized controlled",)),
            LabelRule("generic", "b", ("randomized",)),
        )
        assert evaluate_rules(rules, "randomized controlled trial").name == "specific"
        assert evaluate_rules(rules, "randomized study").name == "generic"
        assert evaluate_rules(rules, "cohort") is None

    def test_exact_mode_requires_whole_text(self):
        rule = LabelRule("care", "CARE", ("care",), mode=MatchMode.EXACT)
        assert rule.matches("care")
        assert not rule.matches("usual care")

    @pytest.mark.parametrize(
        "text",
        [
            "not a systematic review",
            "this isn't a systematic review",
            "rather than a systematic review",
            "no systematic review was done",
        ],
    )
    def test_negation_prefixes(self, text):
        assert is_negated(text, "systematic review")

    def test_negation_requires_word_boundary(self):
        """'piano' ends with 'no' but is not a negation."""
        assert not is_negated("piano systematic review", "systematic review")

    def test_unless_negated_skips_rule(self):
        rule = LabelRule("trial", "t", ("trial",), unless_negated=("randomized",))
        assert rule.matches("randomized trial")
        assert rule.matches("trial")
        assert not rule.matches("non-randomized trial")
        assert rule.matches("not randomized at first, later randomized trial")

    def test_unless_negated_phrases_must_be_lowercase(self):
        with pytest.raises(ValueError):
            LabelRule("bad", StudyType.RCT, ("trial",), unless_negated=("Randomized",))
