"""Host orchestration: configuration loading, project defaults and generation entrypoints."""
