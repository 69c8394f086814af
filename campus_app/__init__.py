"""CampusStyle application wiring: configuration, logging, errors and the app facade."""
