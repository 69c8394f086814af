"""Pure plan logic: request building, reply validation, edits and shopping results."""
