"""gzembed — embed a directory of static files and serve it with gzip negotiation.

Build once, serve without a filesystem::

    from gzembed import BundleConfig, build_bundle, write_module

    bundle = build_bundle(BundleConfig(source_dir="public"))
    write_module(bundle, "web_data/__init__.py", module_name="web_data")

Then point any ASGI server at the generated module::

    uvicorn web_data:app

or wrap a bundle yourself::

    from gzembed import Dispatcher, load_bundle

    app = Dispatcher(load_bundle("web_data"))
"""

__version__ = "0.1.0"
__all__ = [
    "Asset",
    "BuildError",
    "BuildResult",
    "Bundle",
    "BundleConfig",
    "CollisionError",
    "Dispatcher",
    "GzembedError",
    "Request",
    "Response",
    "ServeConfig",
    "assemble",
    "build_bundle",
    "load_bundle",
    "negotiate",
    "write_module",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import gzembed`` fast while providing a clean top-level API.
    """
    if name in ("Asset", "BuildResult", "Bundle", "assemble", "build_bundle"):
        from gzembed import bundle

        return getattr(bundle, name)

    if name in ("BundleConfig", "ServeConfig"):
        from gzembed import config

        return getattr(config, name)

    if name in ("BuildError", "CollisionError", "GzembedError"):
        from gzembed import errors

        return getattr(errors, name)

    if name == "Dispatcher":
        from gzembed.dispatch.dispatcher import Dispatcher

        return Dispatcher

    if name == "negotiate":
        from gzembed.dispatch.negotiation import negotiate

        return negotiate

    if name == "Request":
        from gzembed.http.request import Request

        return Request

    if name == "Response":
        from gzembed.http.response import Response

        return Response

    if name == "load_bundle":
        from gzembed.artifact.loader import load_bundle

        return load_bundle

    if name == "write_module":
        from gzembed.artifact.writer import write_module

        return write_module

    raise AttributeError(f"module 'gzembed' has no attribute {name!r}")
