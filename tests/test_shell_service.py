import asyncio
import io
import zipfile

from conftest import BAKERY_CODE, BAKERY_PROMPT, FakeGenerator, make_shell
from config.prompt_examples import PROMPT_EXAMPLES
from models.generation import GeneratedCode, GenerationFailure, GenerationSuccess, ValidationFailure
from models.shell import ShellState, SpeechResultItem
from services.speech_service import RelayedSpeechRecognizer


def run(coro):
    return asyncio.run(coro)


def test_shell_starts_idle():
    shell = make_shell(FakeGenerator())
    snapshot = shell.snapshot()
    assert snapshot.state == ShellState.IDLE
    assert snapshot.code is None
    assert snapshot.preview is None
    assert not snapshot.submit_disabled
    assert shell.download() is None


def test_short_prompt_fails_inline_without_dispatch():
    generator = FakeGenerator()
    shell = make_shell(generator)

    result = run(shell.submit("hi"))

    assert isinstance(result, ValidationFailure)
    assert shell.state == ShellState.FAILED
    assert shell.errors == {"prompt": ["Prompt must be at least 10 characters long."]}
    assert generator.calls == []
    assert shell.notifications[-1].variant == "destructive"


def test_successful_generation_rekeys_preview_and_enables_download():
    shell = make_shell(FakeGenerator())

    result = run(shell.submit(BAKERY_PROMPT))

    assert isinstance(result, GenerationSuccess)
    assert shell.state == ShellState.SUCCEEDED
    assert shell.code == BAKERY_CODE
    assert shell.preview.key == 1
    assert "<h1>Bakery</h1>" in shell.preview.document
    assert shell.notifications[-1].title == "Status"
    assert shell.notifications[-1].description == "Website generated successfully!"

    with zipfile.ZipFile(io.BytesIO(shell.download())) as archive:
        assert sorted(archive.namelist()) == ["index.html", "script.js", "style.css"]


def test_each_success_gets_a_fresh_frame():
    generator = FakeGenerator()
    generator.responses["Build a site about otters"] = GeneratedCode(html="<h1>Otters</h1>")
    shell = make_shell(generator)

    run(shell.submit(BAKERY_PROMPT))
    first = shell.preview
    run(shell.submit("Build a site about otters"))

    assert shell.preview.key == first.key + 1
    assert "<h1>Otters</h1>" in shell.preview.document


def test_failure_keeps_previous_preview():
    generator = FakeGenerator()
    generator.responses["Make it rain please"] = RuntimeError("rate limited")
    shell = make_shell(generator)

    run(shell.submit(BAKERY_PROMPT))
    frame = shell.preview
    result = run(shell.submit("Make it rain please"))

    assert isinstance(result, GenerationFailure)
    assert shell.state == ShellState.FAILED
    assert "rate limited" in shell.notifications[-1].description
    assert shell.code == BAKERY_CODE
    assert shell.preview is frame
    assert shell.errors is None


def test_submit_disabled_while_pending():
    async def scenario():
        generator = FakeGenerator()
        generator.gate(BAKERY_PROMPT)
        shell = make_shell(generator)

        task = asyncio.create_task(shell.submit(BAKERY_PROMPT))
        await asyncio.sleep(0)
        assert shell.state == ShellState.PENDING
        assert shell.submit_disabled

        generator.release(BAKERY_PROMPT)
        await task
        assert shell.state == ShellState.SUCCEEDED
        assert not shell.submit_disabled

    run(scenario())


def test_stale_completion_is_discarded():
    async def scenario():
        slow_prompt = "A slow website about snails"
        fast_prompt = "A fast website about cheetahs"
        generator = FakeGenerator()
        generator.responses[slow_prompt] = GeneratedCode(html="<h1>Snails</h1>")
        generator.responses[fast_prompt] = GeneratedCode(html="<h1>Cheetahs</h1>")
        generator.gate(slow_prompt)
        shell = make_shell(generator)

        slow = asyncio.create_task(shell.submit(slow_prompt))
        await asyncio.sleep(0)
        fast_result = await shell.submit(fast_prompt)
        assert shell.submit_disabled

        generator.release(slow_prompt)
        slow_result = await slow

        assert isinstance(fast_result, GenerationSuccess)
        assert slow_result is None
        assert shell.code.html == "<h1>Cheetahs</h1>"
        assert shell.preview.key == 1
        assert shell.state == ShellState.SUCCEEDED
        assert not shell.submit_disabled

    run(scenario())


def test_invalid_prompt_during_pending_request_wins():
    async def scenario():
        generator = FakeGenerator()
        generator.gate(BAKERY_PROMPT)
        shell = make_shell(generator)

        pending = asyncio.create_task(shell.submit(BAKERY_PROMPT))
        await asyncio.sleep(0)
        invalid = await shell.submit("hi")
        assert isinstance(invalid, ValidationFailure)

        generator.release(BAKERY_PROMPT)
        assert await pending is None

        assert shell.state == ShellState.FAILED
        assert shell.errors == {"prompt": ["Prompt must be at least 10 characters long."]}
        assert shell.code is None
        assert shell.preview is None
        assert not shell.submit_disabled

    run(scenario())


def test_select_preset_fills_prompt_and_submits():
    generator = FakeGenerator()
    shell = make_shell(generator)

    run(shell.select_preset(PROMPT_EXAMPLES[3]))

    assert shell.prompt == PROMPT_EXAMPLES[3]
    assert generator.calls == [PROMPT_EXAMPLES[3]]
    assert shell.state == ShellState.SUCCEEDED


def test_select_suggestion_without_auto_submit():
    generator = FakeGenerator()
    shell = make_shell(generator)
    shell.set_prompt("coffee")
    assert shell.snapshot().suggestions_visible

    result = run(shell.select_suggestion(PROMPT_EXAMPLES[6], auto_submit=False))

    assert result is None
    assert shell.prompt == PROMPT_EXAMPLES[6]
    assert not shell.snapshot().suggestions_visible
    assert generator.calls == []
    assert shell.state == ShellState.IDLE


def test_dictation_unsupported_by_default():
    shell = make_shell(FakeGenerator())
    assert shell.toggle_dictation() is False
    assert shell.notifications[-1].title == "Unsupported Feature"


def test_dictation_appends_transcript_to_prompt():
    speech = RelayedSpeechRecognizer()
    shell = make_shell(FakeGenerator(), speech=speech)
    shell.set_prompt("A website ")

    assert shell.toggle_dictation() is True
    speech.dispatch_result([SpeechResultItem(transcript="for a bakery", is_final=True)])

    assert shell.prompt == "A website for a bakery"
    assert shell.recording

    assert shell.toggle_dictation() is False
    assert not speech.listening


def test_dictation_error_resets_recording():
    speech = RelayedSpeechRecognizer()
    shell = make_shell(FakeGenerator(), speech=speech)
    shell.toggle_dictation()

    speech.dispatch_error("not-allowed")

    assert not shell.recording
    assert shell.notifications[-1].variant == "destructive"
    assert "Microphone access denied" in shell.notifications[-1].description


def test_dictation_end_resets_recording():
    speech = RelayedSpeechRecognizer()
    shell = make_shell(FakeGenerator(), speech=speech)
    shell.toggle_dictation()

    speech.dispatch_end()

    assert not shell.recording
    assert not speech.listening
