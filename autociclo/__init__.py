# AutoCiclo: local inventory data layer for a vehicle dismantling yard
