"""Tests for the chart pipeline."""

from pathlib import Path

import pytest

from analysis.series import SeriesMode
from config import Config
from core.corpus import CorpusSet, FrequencyEntry, FrequencyTable
from core.errors import EmptyTableError, RenderError
from core.sanitizer import cleaned
from pipeline import ChartPipeline, ChartRequest, build_chart_plan


class FakeRenderer:
    """Records charts instead of drawing them."""

    def __init__(self, log, fail_on=()):
        self.log = log
        self.fail_on = set(fail_on)

    def render(self, chart, path):
        path = Path(path)
        if path.name in self.fail_on:
            raise RenderError(path, "disk full")
        self.log.append((path, chart))
        return path


@pytest.fixture
def rendered():
    return []


def make_pipeline(tmp_path, rendered, fail_on=(), **config_kwargs):
    config = Config(output_dir=tmp_path / "out", reference_dir=None, **config_kwargs)

    def factory(path, size):
        assert size == config.canvas_size
        return FakeRenderer(rendered, fail_on)

    return ChartPipeline(config, renderer_factory=factory)


class TestChartPlan:
    """Which charts a run produces."""

    def test_without_reference(self):
        names = [r.file_name for r in build_chart_plan(has_reference=False)]
        assert names == [
            "Unique N-Grams.svg",
            "Unique N-Grams (increase).svg",
            "1-grams.svg",
            "2-grams.svg",
            "3-grams.svg",
            "1-grams (filtered).svg",
            "2-grams (filtered).svg",
            "3-grams (filtered).svg",
        ]

    def test_with_reference(self):
        plan = build_chart_plan(has_reference=True)
        names = [r.file_name for r in plan]

        assert len(plan) == 16
        assert "Unique N-Grams (referenced).svg" in names
        assert "Unique N-Grams (referenced + increase).svg" in names
        assert "3-grams (referenced).svg" in names
        assert "1-grams (filtered + referenced).svg" in names
        assert len(set(names)) == len(names)

    def test_filtered_referenced_flags(self):
        plan = build_chart_plan(has_reference=True)
        request = next(r for r in plan if r.file_name == "2-grams (filtered + referenced).svg")
        assert request.filtered and request.use_reference
        assert request.length == 2
        assert request.mode is SeriesMode.BY_TOKEN_OCCURRENCE

    def test_overviews_are_png(self):
        plan = build_chart_plan(has_reference=False, overviews=True)
        overviews = [r for r in plan if r.suffix == ".png"]
        assert [r.file_name for r in overviews] == [
            "Unique N-Grams (overview).png",
            "Unique N-Grams (increase overview).png",
        ]


class TestRun:
    """Running a plan with a recording renderer."""

    def test_all_charts_written(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered)
        result = pipeline.run(sized_corpus((5, 6, 7)))

        assert result.ok
        assert len(result.written) == 8
        assert result.written[0] == tmp_path / "out" / "Unique N-Grams.svg"
        assert [chart.title for _, chart in rendered][:2] == ["Unique N-Grams", "Unique N-Grams (increase)"]

    def test_filtered_charts_use_truncated_tables(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered, filter_limits=(2, 3, 4))
        subject = sized_corpus((5, 6, 7))
        pipeline.run(subject)

        charts = {path.name: chart for path, chart in rendered}
        assert len(charts["1-grams (filtered).svg"].x_domain) == 2
        assert len(charts["3-grams (filtered).svg"].x_domain) == 4
        assert len(charts["1-grams.svg"].x_domain) == 5
        # Subject untouched
        assert [len(t) for t in subject] == [5, 6, 7]

    def test_referenced_charts_have_two_series(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered)
        result = pipeline.run(sized_corpus((5, 6, 7)), sized_corpus((50, 60, 70), name="reference"))

        assert len(result.written) == 16
        charts = {path.name: chart for path, chart in rendered}
        assert len(charts["2-grams (referenced).svg"].series) == 2
        assert len(charts["2-grams.svg"].series) == 1
        # Filtered charts compare against the full reference
        ref_series = charts["1-grams (filtered + referenced).svg"].series[0]
        assert len(ref_series.points) == 50

    def test_empty_table_fails_only_its_charts(self, tmp_path, rendered, sized_corpus, capsys):
        pipeline = make_pipeline(tmp_path, rendered)
        result = pipeline.run(sized_corpus((5, 0, 7)))

        failed = {request.file_name: error for request, error in result.failed}
        assert set(failed) == {"2-grams.svg", "2-grams (filtered).svg"}
        assert all(isinstance(error, EmptyTableError) for error in failed.values())
        assert len(result.written) == 6
        assert not result.ok
        assert "2-grams.svg" in capsys.readouterr().out

    def test_render_error_fails_only_its_chart(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered, fail_on={"3-grams.svg"})
        result = pipeline.run(sized_corpus((5, 6, 7)))

        assert [request.file_name for request, _ in result.failed] == ["3-grams.svg"]
        assert isinstance(result.failed[0][1], RenderError)
        assert len(result.written) == 7

    def test_progress_callback(self, tmp_path, rendered, sized_corpus):
        calls = []
        pipeline = make_pipeline(tmp_path, rendered)
        pipeline.run(sized_corpus((1, 1, 1)), on_progress=lambda *args: calls.append(args))

        assert len(calls) == 8
        assert calls[-1][1:] == (8, 8)
        assert calls[0] == ("Unique N-Grams.svg", 1, 8)

    def test_parallel_workers(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered, workers=4)
        result = pipeline.run(sized_corpus((5, 6, 7)))

        assert result.ok
        assert sorted(p.name for p in result.written) == sorted(
            r.file_name for r in build_chart_plan(has_reference=False)
        )

    def test_custom_plan(self, tmp_path, rendered, sized_corpus):
        plan = [ChartRequest("2-grams", SeriesMode.BY_TOKEN_OCCURRENCE, length=2, suffix=".png")]
        pipeline = make_pipeline(tmp_path, rendered)
        result = pipeline.run(sized_corpus((1, 2, 3)), plan=plan)
        assert [p.name for p in result.written] == ["2-grams.png"]

    def test_referenced_plan_needs_reference(self, tmp_path, rendered, sized_corpus):
        pipeline = make_pipeline(tmp_path, rendered)
        with pytest.raises(ValueError):
            pipeline.run(sized_corpus((1, 1, 1)), plan=build_chart_plan(has_reference=True))


class TestRealRenderers:
    """End-to-end with the default renderers."""

    def test_writes_files(self, tmp_path, make_corpus):
        config = Config(output_dir=tmp_path / "target", canvas_size=(640, 480), overviews=True)
        subject = make_corpus([[10, 5, 3], [4, 2], [1]])
        result = ChartPipeline(config).run(subject)

        assert result.ok
        assert (tmp_path / "target" / "Unique N-Grams.svg").exists()
        assert (tmp_path / "target" / "3-grams (filtered).svg").exists()
        assert (tmp_path / "target" / "Unique N-Grams (overview).png").exists()

    def test_parallel_dollar_tokens(self, tmp_path):
        """Several threads drawing '$...$' labels at once."""
        def dollar_corpus(name, scale):
            tables = tuple(
                FrequencyTable.from_entries(length, [
                    FrequencyEntry(scale * (100 - i), cleaned(f"$\\notacommand{i}$"))
                    for i in range(30)
                ])
                for length in (1, 2, 3)
            )
            return CorpusSet(name, tables)

        config = Config(output_dir=tmp_path / "target", canvas_size=(640, 480), workers=8)
        result = ChartPipeline(config).run(dollar_corpus("subject", 1), dollar_corpus("reference", 5))

        assert result.ok, result.failed
        assert len(result.written) == 16
        assert all(path.exists() for path in result.written)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
