from django.dispatch import Signal


# Sent by owners of a source image after its bytes have been replaced.
# Receivers get ``source``.
source_changed = Signal()

# Sent after a derivative has been written. Receivers get ``source``, ``name``,
# ``format`` and ``args``.
derivative_generated = Signal()
