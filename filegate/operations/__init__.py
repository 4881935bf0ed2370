"""Operations layer: folder registry, object storage, email and reminders."""
