"""
Nullables - Live and null construction for A-Frame applications.

Every infrastructure and application component exposes two factories:
``create`` builds it against the real outside world, ``create_null`` builds
the same graph on embedded stubs that answer from configured responses,
record outbound calls, and emit state events. Tests use the null graph
instead of mocks.

Layers (A-Frame):
- domain: pure logic and value objects
- infrastructure: wrappers around one external capability each
- application: orchestration of the other two
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
