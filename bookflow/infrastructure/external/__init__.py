"""External collaborators: email, outbound HTTP, booking service customers."""
