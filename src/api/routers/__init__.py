# Route modules, one per resource group; `src.api.app` mounts them.
