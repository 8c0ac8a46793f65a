"""Interactive lesson: steer a linear decision boundary through synthetic data."""
