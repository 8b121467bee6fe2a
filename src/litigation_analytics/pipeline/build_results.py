from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from litigation_analytics.comparative import compare_results
from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.results import extract_search_results
from litigation_analytics.io.source import DataSource
from litigation_analytics.scaling.variability import VariabilityInfo, describe_variability
from litigation_analytics.selectors import Selector, baseline_selector
from litigation_analytics.series import SearchResults

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResultsBundle:
    selector: Selector
    baseline_selector: Selector
    subject: SearchResults
    baseline: SearchResults
    comparative: SearchResults
    variability: VariabilityInfo

    def to_dict(self) -> dict[str, Any]:
        return {
            "selector": self.selector.to_dict(),
            "baselineSelector": self.baseline_selector.to_dict(),
            "subject": self.subject.to_dict(),
            "baseline": self.baseline.to_dict(),
            "comparative": self.comparative.to_dict(),
            "variability": self.variability.to_dict(),
        }


def _extract(source: DataSource, selector: Selector, config: AppConfig) -> SearchResults:
    fetched = source.fetch(selector)
    return extract_search_results(fetched.records, fetched.motions, config)


def build_results(source: DataSource, selector: Selector, config: AppConfig) -> ResultsBundle:
    """Extract the selection and its baseline population, then compare them."""
    reference = baseline_selector(selector)
    subject = _extract(source, selector, config)
    baseline = subject if reference == selector else _extract(source, reference, config)
    LOGGER.info(
        "Built results for %s against baseline %s (%.0f vs %.0f cases)",
        selector,
        reference,
        subject.total_cases,
        baseline.total_cases,
    )
    return ResultsBundle(
        selector=selector,
        baseline_selector=reference,
        subject=subject,
        baseline=baseline,
        comparative=compare_results(subject, baseline),
        variability=describe_variability(subject.total_cases, bands=config.variability),
    )
