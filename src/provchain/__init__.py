"""Supply-chain provenance records on a tagged-data ledger."""
