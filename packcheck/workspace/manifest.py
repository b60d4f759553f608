# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
package.json access for fixture projects.

Fixture projects use the two-package layout: the development package.json
at the project root carries the `build` section, and `app/package.json`
(when present) carries the application's own name, productName and
version. Tests tweak either file through modify_package_json before the
build runs.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from packcheck.config.exceptions import DocumentParseError
from packcheck.config.schema import ProductMetadata
from packcheck.logging.logger import get_logger
from packcheck.utils.filesystem import read_json, write_json

logger = get_logger(__name__)

PACKAGE_JSON = "package.json"
APP_DIR = "app"


def package_json_path(project_dir: Path, is_app: bool = False) -> Path:
    if is_app:
        return project_dir / APP_DIR / PACKAGE_JSON
    return project_dir / PACKAGE_JSON


def _load(path: Path) -> dict[str, Any]:
    try:
        data = read_json(path)
    except ValueError as err:
        raise DocumentParseError(f"Invalid JSON in {path}: {err}") from err
    if not isinstance(data, dict):
        raise DocumentParseError(f"{path} root is not a JSON object")
    return data


def modify_package_json(
    project_dir: Path,
    task: Callable[[dict[str, Any]], None],
    is_app: bool = False,
) -> None:
    """Load package.json, let `task` mutate the dict in place, write it back."""
    path = package_json_path(project_dir, is_app)
    data = _load(path)
    task(data)
    write_json(path, data)
    logger.debug("package.json modified", extra={"path": str(path)})


def read_product_metadata(project_dir: Path) -> ProductMetadata:
    """
    Build ProductMetadata from the project's package.json files.

    productName resolution: `build.productName` in the development
    package.json, then `productName` in the application package.json.

    Raises:
        DocumentParseError: Missing or malformed package.json, or no `name`.
    """
    dev_data = _load(package_json_path(project_dir))
    app_path = package_json_path(project_dir, is_app=True)
    app_data = _load(app_path) if app_path.is_file() else dev_data

    build = dev_data.get("build") or {}
    fields: dict[str, Any] = {
        "product_name": build.get("productName") or app_data.get("productName"),
        "name": app_data.get("name"),
    }
    if app_data.get("version"):
        fields["version"] = app_data["version"]
    if build.get("appId"):
        fields["id"] = build["appId"]
    category = build.get("app-category-type") or build.get("category")
    if category:
        fields["category"] = category

    try:
        return ProductMetadata.model_validate(fields)
    except ValidationError as err:
        raise DocumentParseError(f"Incomplete package metadata in {project_dir}:\n{err}") from err
