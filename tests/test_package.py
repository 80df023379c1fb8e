"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import runboard

    assert runboard.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from runboard.config import (
        AggregationConfig,
        ChartMode,
        DashboardConfig,
        LoggingConfig,
        ValidationConfig,
        load_config,
    )

    assert DashboardConfig is not None
    assert ValidationConfig is not None
    assert AggregationConfig is not None
    assert LoggingConfig is not None
    assert ChartMode is not None
    assert load_config is not None


def test_pipeline_module_imports() -> None:
    """Verify the public processing entry points are exported."""
    from runboard.aggregation import calculate_overall_metrics, calculate_runner_stats
    from runboard.dashboard import DashboardPipeline, process_upload
    from runboard.schemas import SchemaRegistry
    from runboard.validation import UploadValidator, validate_upload

    assert DashboardPipeline is not None
    assert process_upload is not None
    assert UploadValidator is not None
    assert validate_upload is not None
    assert calculate_overall_metrics is not None
    assert calculate_runner_stats is not None
    assert SchemaRegistry is not None


def test_cli_app_exists() -> None:
    """Verify the CLI application object is importable."""
    from runboard.cli import app

    assert app.info.name == "runboard"
