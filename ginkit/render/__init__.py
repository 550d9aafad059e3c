"""Response renderers that write a body and its Content-Type to a response writer."""