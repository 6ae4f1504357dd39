# Request and response models for the REST surface, grouped by resource.
# Request bodies accept the web app's camelCase keys through `common.CamelModel`.
