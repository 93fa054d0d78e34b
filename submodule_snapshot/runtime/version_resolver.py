"""Version resolution for submodule working trees.

Each submodule is resolved to the closest reachable tag (``git describe
--tags``) or, when no tag is reachable, to the short hash of its checkout.
Resolution of independent submodules runs on a thread pool; results are
written back by index so the output order always matches the input order.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from submodule_snapshot.errors import VersionResolutionFailed
from submodule_snapshot.models import SubmoduleRecord
from submodule_snapshot.runtime.git import GitCommandSource
from submodule_snapshot.runtime.protocols import VersionSource

logger = logging.getLogger("submodule_snapshot.runtime.version_resolver")

DEFAULT_MAX_WORKERS = 8


class VersionResolver:
    """Resolve tags or short hashes for submodule working trees.

    Attributes:
        root: Directory that relative submodule paths are resolved against.
        max_workers: Upper bound on concurrent git invocations.
    """

    def __init__(
        self,
        source: Optional[VersionSource] = None,
        root: Optional[Union[str, Path]] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._source = source or GitCommandSource()
        self.root = Path(root) if root is not None else Path(".")
        self.max_workers = max(1, max_workers)

    def working_tree(self, path: Union[str, Path]) -> Path:
        """Return the normalised location of a submodule working tree."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        return Path(os.path.normpath(str(candidate)))

    def resolve(self, path: Union[str, Path]) -> str:
        """Return the tag or short hash checked out at ``path``.

        Args:
            path: Submodule path, absolute or relative to ``root``.

        Returns:
            The tag (possibly with a ``-<n>-g<hash>`` suffix) or the short hash.

        Raises:
            VersionResolutionFailed: If neither git query succeeds.
        """
        tree = self.working_tree(path)
        logger.debug("Trying to get TAG/SHA for %s", tree)

        result = self._source.resolve_tag(tree)
        if not result.ok:
            logger.debug("No tag reachable from %s, falling back to short hash", tree)
            result = self._source.resolve_hash(tree)
            if not result.ok:
                logger.error("git failed for %s: %s", tree, result.stderr.strip())
                raise VersionResolutionFailed(str(tree), result.stderr)

        version = result.stdout.strip()
        logger.info("Detected TAG/SHA %s for %s", version, tree)
        return version

    def resolve_all(self, records: Sequence[SubmoduleRecord]) -> List[SubmoduleRecord]:
        """Resolve every record concurrently, preserving input order.

        Raises:
            VersionResolutionFailed: For the first submodule that fails; work
                that has not started yet is cancelled.
        """
        if not records:
            return []

        versions: List[Optional[str]] = [None] * len(records)
        workers = min(self.max_workers, len(records))
        logger.debug(
            "Resolving %d submodule version(s) with %d worker(s)", len(records), workers
        )

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="GitVersion") as executor:
            futures: Dict[Future[str], int] = {
                executor.submit(self.resolve, record.path): index
                for index, record in enumerate(records)
            }
            for future in as_completed(futures):
                index = futures[future]
                try:
                    versions[index] = future.result()
                except VersionResolutionFailed:
                    for pending in futures:
                        pending.cancel()
                    raise

        return [
            record.with_version(version or "")
            for record, version in zip(records, versions)
        ]


def resolve_versions(
    records: Sequence[SubmoduleRecord],
    root: Optional[Union[str, Path]] = None,
    source: Optional[VersionSource] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[SubmoduleRecord]:
    """Convenience wrapper around :meth:`VersionResolver.resolve_all`."""
    resolver = VersionResolver(source=source, root=root, max_workers=max_workers)
    return resolver.resolve_all(records)
