"""Default configuration, the single source of truth for default run parameters."""

from dynbatch.config.run import RunConfig

# All-default values: matrix-market input, one batch, custom sampler with the
# degree-proportional family, no insertions or deletions, OS-entropy seed.
DEFAULT_CONFIG = RunConfig()
