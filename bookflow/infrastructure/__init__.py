"""Infrastructure: persistence backends and external collaborator implementations."""
