class ShortCodeExhaustedError(Exception):
    """Every allocation attempt collided with an existing code."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate unique short code after {attempts} attempts")
