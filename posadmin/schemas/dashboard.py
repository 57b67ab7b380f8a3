from pydantic import BaseModel

class DailySales(BaseModel):
    date: str
    total: float

class WeeklySales(BaseModel):
    week: str
    total: float

class MonthlySales(BaseModel):
    month: str
    total: float

class TopProduct(BaseModel):
    id: int | str
    name: str
    quantity: int
    total: float

class DashboardStats(BaseModel):
    totalRevenue: float
    totalTransactions: int
    totalProducts: int
    dailySales: list[DailySales]
    weeklySales: list[WeeklySales]
    monthlySales: list[MonthlySales]
    topProducts: list[TopProduct]
