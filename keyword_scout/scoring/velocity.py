"""Trend velocity scoring from short and long window growth."""


class TrendVelocityScorer:
    """Measure whether a keyword's growth is speeding up or slowing down.

    Velocity is twice the gap between 7-day and 30-day growth:
    - Accelerating (7d > 30d): positive, capped at 100
    - Decelerating or flat: zero or negative, floored at -100
    """

    MAX_VELOCITY = 100
    MIN_VELOCITY = -100

    def calculate(self, growth_7d: float, growth_30d: float) -> float:
        """Calculate velocity score.

        Args:
            growth_7d: Growth over the last 7 days, in percent
            growth_30d: Growth over the last 30 days, in percent

        Returns:
            Velocity score, roughly -100 to 100
        """
        delta = growth_7d - growth_30d

        # Cap only on the accelerating branch, floor only on the decelerating one
        if growth_7d > growth_30d:
            return min(self.MAX_VELOCITY, delta * 2)
        return max(self.MIN_VELOCITY, delta * 2)
