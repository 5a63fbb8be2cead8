from imginfo_shared import errors as errors_mod
from imginfo_shared.errors import sanitize_error_message


class _RecordingLogger:
    def __init__(self):
        self.messages = []

    def debug(self, msg, *args):
        self.messages.append(msg % args)


def test_masks_paths_and_falls_back():
    assert "[path]" in sanitize_error_message(OSError("cannot open /var/data/secret.gif"))
    assert sanitize_error_message(ValueError(""), "fallback") == "fallback"
    assert sanitize_error_message(ValueError("")) == "ValueError"
    assert len(sanitize_error_message(ValueError("x" * 500))) == 200


def test_debug_env_is_read_on_each_call(monkeypatch):
    recorder = _RecordingLogger()
    monkeypatch.setattr(errors_mod, "logger", recorder)

    monkeypatch.delenv("IMGINFO_DEBUG", raising=False)
    sanitize_error_message(ValueError("quiet"))
    assert recorder.messages == []

    monkeypatch.setenv("IMGINFO_DEBUG", "1")
    sanitize_error_message(ValueError("loud"))
    assert recorder.messages == ["Sanitized error payload: loud"]

    monkeypatch.setenv("IMGINFO_DEBUG", "off")
    sanitize_error_message(ValueError("quiet again"))
    assert len(recorder.messages) == 1
