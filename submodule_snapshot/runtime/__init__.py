"""Runtime pipeline: version resolution, orchestration and submission."""
