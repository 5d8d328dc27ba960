"""Project data builders."""
