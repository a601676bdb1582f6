"""Django settings modules shipped with report-pivot."""
