"""Tests for the error hierarchy."""

from util.errors import (
    AppError,
    ConfigurationError,
    DirectoryTraversalError,
    FileReadError,
    NamespaceResolutionError,
    PathError,
    PathNotFoundError,
    RemoteApiError,
    SerializationError,
    WriteError,
)


def test_every_error_is_an_app_error():
    for err in (
        ConfigurationError(["A"]),
        PathNotFoundError("/x"),
        DirectoryTraversalError("/x/y"),
        FileReadError("/x/f"),
        SerializationError("k"),
        RemoteApiError("GET failed"),
        NamespaceResolutionError("ns", "error with creating namespace"),
        WriteError("k"),
    ):
        assert isinstance(err, AppError)
        assert str(err) == err.message


def test_path_errors_share_a_base():
    assert isinstance(PathNotFoundError("/x"), PathError)
    assert isinstance(DirectoryTraversalError("/x"), PathError)
    assert not isinstance(FileReadError("/x"), PathError)


def test_configuration_error_lists_every_name():
    err = ConfigurationError(["CF_API_KEY", "TARGET_DIRECTORY"], ["LOG_LEVEL: bad"])
    assert str(err) == "CF_API_KEY not found\nTARGET_DIRECTORY not found\nLOG_LEVEL: bad"


def test_remote_api_error_details():
    err = RemoteApiError("PUT failed", status_code=500, errors=["10001: boom"])
    assert err.status_code == 500
    assert str(err) == "PUT failed (10001: boom)"


def test_contextual_fields():
    assert PathNotFoundError("/data").path == "/data"
    assert WriteError("a/b.txt").key == "a/b.txt"
    assert "a/b.txt" in str(WriteError("a/b.txt"))
