# Seed catalog applied once at start-up when a name is missing.
# Weekdays: 0=Domingo .. 6=Sábado.

ROLES = [
    {"name": "Centralista", "description": "Atención de llamadas por turnos", "permission": "empleado"},
    {"name": "Despachador", "description": "Despacho de unidades por turnos", "permission": "empleado"},
    {"name": "Turno Noche", "description": "Cobertura nocturna, luego rota a Centralista", "permission": "empleado"},
    {"name": "Part Time", "description": "Horarios de fin de semana según necesidad", "permission": "empleado"},
    {"name": "Supervisor", "description": "Supervisión de operaciones", "permission": "supervisor"},
    {"name": "Coordinador", "description": "Coordinación de equipos", "permission": "supervisor"},
    {"name": "Administrador", "description": "Administración del sistema", "permission": "admin"},
]

SCHEDULE_TEMPLATES = [
    {
        "name": "Centralista Turno Mañana",
        "entry": "07:00",
        "exit": "16:00",
        "weekdays": [0, 1, 2, 3, 4, 5, 6],
        "description": "Centralista - Turno Mañana: 5 días trabajo, 2 descanso",
        "kind": "rotation",
        "required_role": "Centralista",
    },
    {
        "name": "Centralista Turno Tarde",
        "entry": "14:30",
        "exit": "23:30",
        "weekdays": [1, 2, 3, 4, 5, 6],
        "description": "Centralista - Turno Tarde: 4 días trabajo, 2 descanso",
        "kind": "rotation",
        "required_role": "Centralista",
    },
    {
        "name": "Despachador Turno Mañana",
        "entry": "07:00",
        "exit": "15:00",
        "weekdays": [1, 2, 3, 4, 5, 6],
        "description": "Despachador - Turno Mañana: 6 días trabajo, 1 descanso",
        "kind": "rotation",
        "required_role": "Despachador",
    },
    {
        "name": "Despachador Turno Tarde",
        "entry": "15:00",
        "exit": "23:00",
        "weekdays": [1, 2, 3, 4, 5, 6],
        "description": "Despachador - Turno Tarde: 6 días trabajo, 1 descanso",
        "kind": "rotation",
        "required_role": "Despachador",
    },
    {
        "name": "Turno Noche",
        "entry": "23:30",
        "exit": "07:00",
        "weekdays": [0, 1, 2, 3, 4, 5, 6],
        "description": "Turno Noche: Domingo 23:30 - Sábado 07:00",
        "kind": "rotation",
        "required_role": "Turno Noche",
    },
    {
        "name": "Part Time Sábado Noche",
        "entry": "23:30",
        "exit": "07:00",
        "weekdays": [6],
        "description": "Part Time - Sábado Noche",
        "kind": "part_time",
        "required_role": None,
    },
    {
        "name": "Part Time Domingo Tarde",
        "entry": "15:00",
        "exit": "23:00",
        "weekdays": [0],
        "description": "Part Time - Domingo Tarde",
        "kind": "part_time",
        "required_role": None,
    },
]
