"""
Lookup errors raised by the estimating engine.

Both subclass ValueError so callers that only care about "bad input"
can catch one type.
"""


class UnknownProfileError(ValueError):
    def __init__(self, profile, available):
        self.profile = profile
        self.available = list(available)
        super().__init__(
            f"Unknown aluminium profile: {profile!r}. "
            f"Available: {self.available}"
        )


class UnknownGlassLabelError(ValueError):
    def __init__(self, label, available):
        self.label = label
        self.available = list(available)
        super().__init__(
            f"Unknown glass label: {label!r}. "
            f"Available: {self.available}"
        )
