"""Application services: policy, guard, gate, allocator front-end and the provisioning saga."""
