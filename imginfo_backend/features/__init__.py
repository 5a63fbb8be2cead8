"""Feature packages for the image info analyzer."""
