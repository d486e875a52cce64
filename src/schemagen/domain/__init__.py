"""Schema cataloging and batch generation domain."""
