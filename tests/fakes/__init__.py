"""In-memory fakes for prflow's gateways."""
