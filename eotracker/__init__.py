# Executive order tracker: snapshot builder, table controller and web surface
