"""Infrastructure layer: operational concerns of the analysis service.

Modules:
    metrics     Prometheus counters and histograms for analyzer runs and
                set-class lookups, exposed at ``/metrics``.
"""
