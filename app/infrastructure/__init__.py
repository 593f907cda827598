"""Infrastructure: Firestore readers and reference-data cache."""
