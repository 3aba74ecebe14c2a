import pytest

from subtitle_batch import progress
from subtitle_batch.config import PipelineConfig, RunContext
from subtitle_batch.errors import NoMediaFilesError, NotFoundError
from subtitle_batch.pipeline import SubtitleBatchAgent

from .conftest import FakeTranscriber, touch


def _agent(root, transcriber, **run_kwargs):
    config = PipelineConfig(run=RunContext(root=root, **run_kwargs))
    return SubtitleBatchAgent(config=config, transcriber=transcriber)


def test_existing_subtitle_is_skipped_and_byproducts_removed(tmp_path, fake_transcriber):
    touch(tmp_path / "a.mp4")
    touch(tmp_path / "a.srt")
    for ext in (".json", ".tsv", ".txt", ".vtt"):
        touch(tmp_path / f"a{ext}")

    summary = _agent(tmp_path, fake_transcriber).run()

    assert fake_transcriber.calls == []
    assert summary.skipped == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.mp4", "a.srt"]


def test_missing_subtitle_is_transcribed_once_and_cleaned_after(tmp_path, fake_transcriber):
    touch(tmp_path / "b.mkv")

    summary = _agent(tmp_path, fake_transcriber).run()

    assert fake_transcriber.calls == [(tmp_path / "b.mkv").resolve()]
    assert summary.transcribed == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["b.mkv", "b.srt"]


def test_second_run_skips_what_the_first_produced(tmp_path, fake_transcriber):
    touch(tmp_path / "b.mkv")
    agent = _agent(tmp_path, fake_transcriber)

    agent.run()
    summary = agent.run()

    assert len(fake_transcriber.calls) == 1
    assert summary.skipped == 1


def test_failure_does_not_stop_the_batch(tmp_path):
    transcriber = FakeTranscriber(succeed=False, write_outputs=False)
    touch(tmp_path / "a.mp4")
    touch(tmp_path / "b.mp4")

    summary = _agent(tmp_path, transcriber).run()

    assert len(transcriber.calls) == 2
    assert summary.failed == 2
    assert summary.error is None


def test_byproducts_of_a_failed_run_are_removed(tmp_path):
    transcriber = FakeTranscriber(succeed=False, write_outputs=True)
    touch(tmp_path / "a.mp4")

    summary = _agent(tmp_path, transcriber).run()

    assert summary.failed == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.mp4", "a.srt"]


def test_byproducts_are_removed_when_transcriber_raises(tmp_path):
    class WritesThenRaises(FakeTranscriber):
        def transcribe(self, media_path, options):
            self.calls.append(media_path)
            media_path.with_suffix(".json").write_text("{}", encoding="utf-8")
            raise RuntimeError("engine crashed")

    transcriber = WritesThenRaises()
    touch(tmp_path / "a.mp4")
    touch(tmp_path / "b.mp4")

    summary = _agent(tmp_path, transcriber).run()

    assert summary.error == "engine crashed"
    assert not (tmp_path / "a.json").exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.mp4", "b.mp4"]


def test_run_context_is_handed_to_transcriber(tmp_path):
    seen = []

    class Recorder(FakeTranscriber):
        def transcribe(self, media_path, options):
            seen.append(options)
            return super().transcribe(media_path, options)

    touch(tmp_path / "a.mp4")

    _agent(tmp_path, Recorder(), auto_detect_language=True, verbose=True).run()

    assert seen[0].auto_detect_language is True
    assert seen[0].verbose is True


def test_empty_root_is_fatal_and_touches_nothing(tmp_path, fake_transcriber):
    touch(tmp_path / "a.json")

    with pytest.raises(NoMediaFilesError):
        _agent(tmp_path, fake_transcriber).run()

    assert fake_transcriber.calls == []
    assert (tmp_path / "a.json").exists()


def test_missing_root_is_fatal(tmp_path, fake_transcriber):
    with pytest.raises(NotFoundError):
        _agent(tmp_path / "missing", fake_transcriber).run()


def test_unexpected_error_is_caught_and_progress_closed(tmp_path):
    events = []

    class Reporter:
        def update(self, advance):
            events.append("update")

        def set_status(self, label):
            events.append(label)

    from contextlib import contextmanager

    @contextmanager
    def factory(total, description):
        events.append(("open", total))
        try:
            yield Reporter()
        finally:
            events.append("close")

    class Exploding(FakeTranscriber):
        def transcribe(self, media_path, options):
            raise RuntimeError("boom")

    progress.set_progress_factory(factory)
    touch(tmp_path / "a.mp4")
    touch(tmp_path / "b.mp4")

    summary = _agent(tmp_path, Exploding()).run()

    assert summary.error == "boom"
    assert events[0] == ("open", 2)
    assert events[-1] == "close"
    assert "update" not in events


def test_progress_reports_each_file(tmp_path, fake_transcriber):
    labels = []
    updates = []

    class Reporter:
        def update(self, advance):
            updates.append(advance)

        def set_status(self, label):
            labels.append(label)

    from contextlib import contextmanager

    @contextmanager
    def factory(total, description):
        yield Reporter()

    progress.set_progress_factory(factory)
    touch(tmp_path / "a.mp4")
    touch(tmp_path / "a.srt")
    touch(tmp_path / "b.mp4")

    _agent(tmp_path, fake_transcriber).run()

    assert updates == [1, 1]
    assert labels == ["a.mp4", "a.mp4 (skipped)", "b.mp4"]
