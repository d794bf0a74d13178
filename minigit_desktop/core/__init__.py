"""Backend supervision: locate, launch, probe, report, shut down."""
