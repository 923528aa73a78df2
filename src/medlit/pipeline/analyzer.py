"""
Methodology Analysis Pipeline

Async orchestration around the deterministic core:

1. Validate the methods excerpt (gate; no oracle call for rejected text)
2. Ask the oracle for a classification and a methodology assessment,
   concurrently; each call has its own timeout and retries and may fail
   on its own
3. Reconcile the classification; dampen the assessment once
4. Merge whatever arrived into a MethodologyReport

Oracle failures degrade the report (sentinel classification, fallback
assessment); they never propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from medlit.classification.reconciler import reconcile_classification
from medlit.config import Settings, get_settings
from medlit.core.enums import OracleTask, ReportStatus
from medlit.core.exceptions import (
    OracleError,
    OracleResponseError,
    OracleTimeoutError,
    PipelineError,
)
from medlit.core.schemas import (
    ClassificationRecord,
    MethodologyAssessment,
    MethodologyReport,
    ValidationRecord,
)
from medlit.oracle.base import Oracle, OracleRequest, OracleResponse
from medlit.oracle.fallbacks import (
    create_fallback_classification,
    create_fallback_methodology,
)
from medlit.oracle.payload import parse_assessment_payload, parse_oracle_json
from medlit.scoring.dampener import dampen_assessment
from medlit.validation.methodology import validate_methodology_text

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, OracleError) and exc.retryable


class MethodologyPipeline:
    """
    Validate, classify and assess a methods excerpt.

    Usage:
        pipeline = MethodologyPipeline(oracle)
        report = await pipeline.analyze(methods_text, full_text=paper_text)
    """

    def __init__(self, oracle: Oracle, settings: Settings | None = None) -> None:
        self._oracle = oracle
        self._settings = settings or get_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def analyze(
        self,
        methods_text: str,
        full_text: str | None = None,
        design_hint: Any = None,
    ) -> MethodologyReport:
        """
        Run the full pipeline for one methods excerpt.

        Args:
            methods_text: Text the user submitted as the methods section.
            full_text: Full paper text; used as the classification document
                and as context for the assessment when given.
            design_hint: ``studyDesign.type`` from a prior extraction, if any.

        Raises:
            PipelineError: If methods_text is not a string.
        """
        if not isinstance(methods_text, str):
            raise PipelineError(
                "methods_text must be a string", {"type": type(methods_text).__name__}
            )

        validation = validate_methodology_text(methods_text)
        if not validation.is_valid and self._settings.pipeline.enable_validation_gate:
            logger.info(
                "Methods text rejected (confidence %d < %d): %s",
                validation.confidence,
                validation.threshold,
                validation.reason,
            )
            return MethodologyReport(status=ReportStatus.REJECTED, validation=validation)

        document = full_text if full_text and full_text.strip() else methods_text
        (classification, class_warning), (assessment, assess_warning) = await asyncio.gather(
            self._classify_or_degrade(document, design_hint),
            self._assess_or_degrade(methods_text, full_text, validation),
        )

        warnings = tuple(w for w in (class_warning, assess_warning) if w)
        status = ReportStatus.DEGRADED if warnings else ReportStatus.COMPLETE
        if warnings:
            logger.warning("Methodology analysis degraded: %s", "; ".join(warnings))

        return MethodologyReport(
            status=status,
            validation=validation,
            classification=classification,
            assessment=assessment,
            warnings=warnings,
        )

    async def classify(self, document_text: str, design_hint: Any = None) -> ClassificationRecord:
        """
        Classify a document through the oracle.

        Raises:
            OracleError: If the oracle fails or answers with something that is
                not a JSON object.
        """
        response = await self._call_oracle(
            OracleRequest(task=OracleTask.CLASSIFY_STUDY, text=document_text)
        )
        data = parse_oracle_json(response.content)
        if data is None:
            raise OracleResponseError(OracleTask.CLASSIFY_STUDY.value, str(response.content or ""))
        return reconcile_classification(data, design_hint=design_hint)

    async def assess(
        self,
        methods_text: str,
        full_text: str | None = None,
    ) -> MethodologyAssessment:
        """
        Ask the oracle for an (undampened) methodology assessment.

        Raises:
            OracleError: If the oracle fails or its answer is unusable.
        """
        response = await self._call_oracle(
            OracleRequest(task=OracleTask.ASSESS_METHODOLOGY, text=methods_text, context=full_text)
        )
        assessment = parse_assessment_payload(response.content)
        if assessment is None:
            raise OracleResponseError(
                OracleTask.ASSESS_METHODOLOGY.value, str(response.content or "")
            )
        return assessment

    # -------------------------------------------------------------------------
    # Degradation wrappers
    # -------------------------------------------------------------------------

    async def _classify_or_degrade(
        self, document_text: str, design_hint: Any
    ) -> tuple[ClassificationRecord, str | None]:
        try:
            return await self.classify(document_text, design_hint), None
        except OracleError as e:
            warning = f"Classification unavailable: {e.message}"
            return create_fallback_classification(warning), warning

    async def _assess_or_degrade(
        self,
        methods_text: str,
        full_text: str | None,
        validation: ValidationRecord,
    ) -> tuple[MethodologyAssessment, str | None]:
        try:
            assessment = await self.assess(methods_text, full_text)
        except OracleError as e:
            warning = f"Methodology assessment unavailable: {e.message}"
            return create_fallback_methodology(methods_text, warning=e.message), warning

        if self._settings.pipeline.enable_dampening:
            assessment = dampen_assessment(assessment, validation.confidence)
        return assessment, None

    # -------------------------------------------------------------------------
    # Oracle calls
    # -------------------------------------------------------------------------

    async def _call_oracle(self, request: OracleRequest) -> OracleResponse:
        """Call the oracle with a per-attempt timeout and retry on transient errors."""
        oracle_settings = self._settings.oracle
        task = request.task.value

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(oracle_settings.max_retries),
            wait=wait_exponential_jitter(
                initial=oracle_settings.retry_min_wait,
                max=oracle_settings.retry_max_wait,
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                logger.debug(
                    "Calling oracle %s for %s (attempt %d/%d)",
                    getattr(self._oracle, "name", "oracle"),
                    task,
                    attempt.retry_state.attempt_number,
                    oracle_settings.max_retries,
                )
                try:
                    return await asyncio.wait_for(
                        self._oracle.generate(request),
                        timeout=oracle_settings.timeout_seconds,
                    )
                except asyncio.TimeoutError as e:
                    raise OracleTimeoutError(task, oracle_settings.timeout_seconds) from e
                except OracleError:
                    raise
                except Exception as e:
                    raise OracleError(f"Oracle call failed: {e}", task=task) from e

        # Not reached: reraise=True re-raises the last error
        raise OracleError("Oracle retries exhausted without result", task=task)
