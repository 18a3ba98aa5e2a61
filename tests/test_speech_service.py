from models.shell import SpeechResultItem
from services.speech_service import (
    NoOpSpeechRecognizer,
    RelayedSpeechRecognizer,
    SpeechFailure,
    combine_transcripts,
    describe_speech_error,
)


def test_final_text_comes_before_interim_text():
    results = [
        SpeechResultItem(transcript="ignored ", is_final=True),
        SpeechResultItem(transcript="maybe ", is_final=False),
        SpeechResultItem(transcript="a bakery ", is_final=True),
    ]
    assert combine_transcripts(results, result_index=1) == "a bakery maybe "


def test_error_categories():
    assert SpeechFailure("not-allowed").category == "not-allowed"
    assert SpeechFailure("service-not-allowed").category == "not-allowed"
    assert SpeechFailure("no-speech").category == "no-speech"
    assert SpeechFailure("network").category == "other"
    assert describe_speech_error("network") == "Speech recognition error: network"
    assert "Microphone access denied" in str(SpeechFailure("not-allowed"))


def test_noop_recognizer_is_unsupported():
    recognizer = NoOpSpeechRecognizer()
    assert not recognizer.supported
    recognizer.start()
    recognizer.stop()


def test_relayed_recognizer_contract():
    recognizer = RelayedSpeechRecognizer()
    assert recognizer.continuous
    assert recognizer.interim_results


def test_results_are_ignored_when_not_listening():
    received = []
    recognizer = RelayedSpeechRecognizer()
    recognizer.bind(received.append, received.append, lambda: None)
    recognizer.dispatch_result([SpeechResultItem(transcript="hello", is_final=True)])
    assert received == []

    recognizer.start()
    recognizer.dispatch_result([SpeechResultItem(transcript="hello", is_final=True)])
    assert received == ["hello"]


def test_error_stops_listening_and_reports_failure():
    failures = []
    recognizer = RelayedSpeechRecognizer()
    recognizer.bind(lambda text: None, failures.append, lambda: None)
    recognizer.start()
    recognizer.dispatch_error("no-speech")
    assert not recognizer.listening
    assert failures[0].category == "no-speech"


def test_end_does_not_restart():
    ended = []
    recognizer = RelayedSpeechRecognizer()
    recognizer.bind(lambda text: None, lambda failure: None, lambda: ended.append(True))
    recognizer.start()
    recognizer.dispatch_end()
    assert ended == [True]
    assert not recognizer.listening
