"""Library catalog service: book CRUD, decorated views and a catalog-aware assistant."""
