"""Artifact loading — resolves a generated module to its ``Bundle``.

Accepts either a filesystem path (the generated ``.py`` file, or the
package directory that contains it) or an import string such as
``"web_data"`` or ``"myapp.web_data:BUNDLE"``.
"""

import importlib
import importlib.util
from pathlib import Path
from types import ModuleType

from gzembed.bundle.types import Bundle
from gzembed.errors import ArtifactError

DEFAULT_ATTRIBUTE = "BUNDLE"


def _load_from_path(path: Path) -> ModuleType:
    if path.is_dir():
        path = path / "__init__.py"
    if not path.is_file():
        msg = f"Artifact not found: {path}"
        raise ArtifactError(msg)

    spec = importlib.util.spec_from_file_location(f"_gzembed_artifact_{path.stem}", path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import artifact from {path}"
        raise ArtifactError(msg)
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Cannot import artifact from {path}: {exc}"
        raise ArtifactError(msg) from exc
    return module


def load_bundle(target: str | Path) -> Bundle:
    """Load the ``Bundle`` defined by a generated artifact.

    Raises:
        ArtifactError: If the artifact cannot be found or imported, or
            the resolved object is not a ``Bundle``.
    """
    attr_name = DEFAULT_ATTRIBUTE
    path = Path(target)
    if isinstance(target, Path) or path.suffix == ".py" or path.exists():
        module = _load_from_path(path)
    else:
        module_path, _, attr = str(target).partition(":")
        attr_name = attr or DEFAULT_ATTRIBUTE
        try:
            module = importlib.import_module(module_path)
        except Exception as exc:
            msg = f"Cannot import artifact module {module_path!r}: {exc}"
            raise ArtifactError(msg) from exc

    obj = getattr(module, attr_name, None)
    if not isinstance(obj, Bundle):
        msg = f"{str(target)!r} has no Bundle named {attr_name!r}"
        raise ArtifactError(msg)
    return obj
