"""php-docblocks -- generate docblocks for undocumented PHP methods.

Core modules:
    config   -- Configuration via pydantic-settings (DOCBLOCK_* env vars) and
                loguru setup
    cli      -- Click CLI entry point. Runs with no arguments against the
                configured root; ROOT and .env path can be passed explicitly.
    runner   -- File discovery and the per-file parse -> synthesize -> print
                -> write loop. Parse failures are reported and skipped.
    parser   -- tree-sitter PHP parsing into MethodDeclaration records with
                byte offsets. Raises ParseError on any syntax error.
    render   -- Type and default-value string forms (?Name, constants,
                scalar values, source span or node kind for the rest)
    synth    -- Node-kind visitor that builds and attaches docblocks
    printer  -- Format-preserving output: original bytes plus new comments
"""
