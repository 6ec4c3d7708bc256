"""
Basic tests for the public surface of serverless-testkit.
"""

from serverless_testkit import exceptions


def test_package_exports():
    """Test the top-level package exposes the helpers."""
    import serverless_testkit

    for name in serverless_testkit.__all__:
        assert hasattr(serverless_testkit, name), name


def test_exception_hierarchy():
    """Test every error derives from the base error with its own code."""
    assert issubclass(exceptions.NotFoundAfterRetries, exceptions.RetriesExhaustedError)
    assert issubclass(exceptions.NoResultsAfterRetries, exceptions.RetriesExhaustedError)
    for error_class in (
        exceptions.ValidationError,
        exceptions.ConfigurationError,
        exceptions.StoreError,
        exceptions.RetriesExhaustedError,
        exceptions.HTTPCallError,
    ):
        assert issubclass(error_class, exceptions.ServerlessTestkitError)

    assert exceptions.StoreError("x").code == "STORE_ERROR"
    assert exceptions.HTTPCallError("x", status_code=500).status_code == 500
    assert exceptions.ServerlessTestkitError("x").context == {}


def test_store_client_is_abstract():
    """Test the store client interface cannot be instantiated."""
    import pytest

    from serverless_testkit.dynamodb import StoreClient

    with pytest.raises(TypeError):
        StoreClient()
