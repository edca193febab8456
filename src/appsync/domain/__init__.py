"""Domain layer: App model, ports, reconciliation and the sync orchestrator."""
