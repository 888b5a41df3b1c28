"""SSH access to application gears: port listing and forwarding."""
