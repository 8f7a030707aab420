"""FastAPI app: list packages and serve dependency trees and summaries."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from pydepth import __version__
from pydepth.api import build_tree, list_known_packages
from pydepth.core.resolver import ResolutionError
from pydepth.core.summary import summarize

app = FastAPI(
    title="pydepth API",
    description="Resolved package dependency trees as JSON",
    version=__version__,
)


@app.get("/api/packages")
def get_packages() -> dict:
    """List all packages declared in the graph manifest."""
    try:
        return {"packages": list_known_packages()}
    except ResolutionError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/api/tree/{package_name}")
def get_tree(
    package_name: str,
    max_depth: int = Query(0, ge=0, le=50),
    internal: bool = False,
    test: bool = False,
) -> dict:
    """Return the dependency tree for a package. max_depth=0 means unlimited."""
    try:
        root = build_tree(
            package_name,
            resolve_internal=internal,
            resolve_test=test,
            max_depth=max_depth,
        )
    except ResolutionError as e:
        raise HTTPException(status_code=404, detail=f"{package_name}: {e}") from e
    return root.to_dict()


@app.get("/api/summary/{package_name}")
def get_summary(
    package_name: str,
    max_depth: int = Query(0, ge=0, le=50),
    internal: bool = False,
    test: bool = False,
) -> dict:
    """Return the deduplicated dependency counts for a package."""
    try:
        root = build_tree(
            package_name,
            resolve_internal=internal,
            resolve_test=test,
            max_depth=max_depth,
        )
    except ResolutionError as e:
        raise HTTPException(status_code=404, detail=f"{package_name}: {e}") from e
    return summarize(root).to_dict()
