"""
Reports Module

Estadísticas mensuales compartidas por los listados transaccionales
(compras, gastos, ingresos, comprobantes, ventas).

Este módulo NO crea tablas: consulta las tablas de los otros módulos a
través de una descripción común de cada entidad (``entities``).

Architecture Pattern: Service Layer
- filters.py   -> Predicado de búsqueda + registros vivos
- periods.py   -> Rangos mes actual/anterior y año actual/anterior (UTC)
- services/    -> Consultas de agregación ejecutadas en paralelo
- changes.py   -> Diferencias y porcentajes de cambio
- assembler.py -> Respuesta final con paginación y metadatos
- routers/     -> Fábrica de endpoints por entidad
"""
