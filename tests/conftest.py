from __future__ import annotations

from datetime import date

import pytest

from keuangan_nlu.config import PipelineConfig, Settings, load_pipeline_config

TODAY = date(2024, 12, 25)


@pytest.fixture(scope="session")
def rules_config() -> PipelineConfig:
    return load_pipeline_config(Settings(classifier_backend="rules"))


@pytest.fixture(scope="session")
def scorer_config() -> PipelineConfig:
    return load_pipeline_config(Settings(classifier_backend="scorer"))


@pytest.fixture
def today() -> date:
    return TODAY
