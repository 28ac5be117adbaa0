"""Infrastructure: record stores, blob storage, notifier and payment adapters."""
