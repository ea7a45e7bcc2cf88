"""Unit tests for the preprint-recommender CLI."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from preprint_recommender.application.use_cases import RecommendationReport
from preprint_recommender.domain.value_objects import MatchResult, SeedMatchGroup
from preprint_recommender.interfaces.cli.recommend import cli, split_categories
from preprint_recommender.shared.exceptions import (
    EmbeddingRetriesExhaustedError,
    NotEnoughSeedsError,
)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def report(make_preprint, make_seed):
    seed = make_seed(title="Seed [A]", embedding=[1.0, 0.0])
    candidate = make_preprint(
        identity="http://arxiv.org/abs/1", title="Close match", embedding=[1.0, 0.1]
    )
    return RecommendationReport(
        total_candidates=4,
        total_seeds=3,
        embedded_seeds=3,
        threshold=0.123456,
        groups=[
            SeedMatchGroup(
                seed=seed,
                matches=[
                    MatchResult(
                        candidate=candidate,
                        matched_seed=seed,
                        raw_similarity=0.99,
                        rescaled_similarity=87.654,
                    )
                ],
            )
        ],
    )


@pytest.fixture
def mock_use_case(report):
    """Patch the factory so no adapters are built."""
    use_case = MagicMock()
    use_case.execute = AsyncMock(return_value=report)
    use_case.close = AsyncMock()
    with (
        patch(
            "preprint_recommender.interfaces.cli.recommend.create_recommend_use_case",
            return_value=use_case,
        ),
        patch("preprint_recommender.interfaces.cli.recommend.get_settings"),
    ):
        yield use_case


class TestSplitCategories:
    """Test cases for category option parsing."""

    def test_space_comma_and_repeat(self):
        assert split_categories(("cs.AI cs.LG", "stat.ML,q-bio.GN", "cs.CL")) == [
            "cs.AI",
            "cs.LG",
            "stat.ML",
            "q-bio.GN",
            "cs.CL",
        ]

    def test_not_given(self):
        assert split_categories(()) is None


class TestRunCommand:
    """Test cases for the run command."""

    def test_prints_grouped_results(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(
            cli,
            ["run", "-s", "seeds", "--arxiv-categories", "cs.AI cs.LG", "-l", "2"],
        )

        assert result.exit_code == 0, result.output
        assert "Computed similarity threshold: 0.1235" in result.output
        assert 'Seed Paper: "Seed [A]"' in result.output
        assert "Close match" in result.output
        assert "87.65%" in result.output
        assert "http://arxiv.org/abs/1" in result.output

        request = mock_use_case.execute.await_args.args[0]
        assert str(request.seed_folder) == "seeds"
        assert request.arxiv_categories == ["cs.AI", "cs.LG"]
        assert request.biorxiv_categories == []
        assert request.look_back_days == 2
        assert request.offset_days == 0
        assert request.max_results == 500
        mock_use_case.close.assert_awaited_once()

    def test_config_file_merged_with_options(
        self, cli_runner, mock_use_case, tmp_path
    ):
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "seedFolder": "file-seeds",
                    "biorxivCategories": ["genomics"],
                    "maxResults": 50,
                }
            )
        )

        result = cli_runner.invoke(
            cli, ["run", "-c", str(config_path), "-s", "cli-seeds", "-o", "1"]
        )

        assert result.exit_code == 0, result.output
        request = mock_use_case.execute.await_args.args[0]
        assert str(request.seed_folder) == "cli-seeds"
        assert request.biorxiv_categories == ["genomics"]
        assert request.max_results == 50
        assert request.offset_days == 1

    def test_missing_seed_folder(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["run", "--arxiv-categories", "cs.AI"])

        assert result.exit_code == 1
        assert "--seed-folder is required" in result.output
        mock_use_case.execute.assert_not_awaited()

    def test_missing_categories(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["run", "-s", "seeds"])

        assert result.exit_code == 1
        assert "categories" in result.output
        mock_use_case.execute.assert_not_awaited()

    def test_invalid_look_back(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(
            cli, ["run", "-s", "seeds", "--arxiv-categories", "cs.AI", "-l", "0"]
        )

        assert result.exit_code == 1
        assert "look_back_days" in result.output

    @pytest.mark.parametrize(
        "error",
        [
            NotEnoughSeedsError(embedded_seeds=1),
            EmbeddingRetriesExhaustedError(title="Paper", attempts=5),
        ],
    )
    def test_fatal_errors_exit_with_one(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch, error
    ):
        mock_use_case.execute.side_effect = error

        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(
            cli, ["run", "-s", "seeds", "--biorxiv-categories", "genomics"]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        mock_use_case.close.assert_awaited_once()

    def test_no_matches(
        self, cli_runner, mock_use_case, tmp_path, monkeypatch
    ):
        mock_use_case.execute.return_value = RecommendationReport(
            total_candidates=0, total_seeds=2, embedded_seeds=2, threshold=0.5
        )

        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(
            cli, ["run", "-s", "seeds", "--arxiv-categories", "cs.AI"]
        )

        assert result.exit_code == 0, result.output
        assert "No preprints cleared the similarity threshold" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "1.0.0" in result.output
