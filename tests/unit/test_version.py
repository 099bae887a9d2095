"""Test basic package functionality."""

import hyperclient_core


def test_version():
    """Test that package version is defined."""
    assert hasattr(hyperclient_core, "__version__")
    assert hyperclient_core.__version__ == "0.1.0"


def test_default_user_agent_carries_version():
    """The default User-Agent names the package and its version."""
    from hyperclient_core.headers import DEFAULT_USER_AGENT

    assert DEFAULT_USER_AGENT == f"hyperclient-core/{hyperclient_core.__version__}"
