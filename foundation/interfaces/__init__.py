"""HTTP interface layer: routers and dependency wiring."""
